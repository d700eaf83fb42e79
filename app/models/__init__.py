"""Record types, schema descriptors and engine utilities."""

from .base import Record, record_model
from .schema import SQL_TYPES, AttributeSchema, RecordDescriptor
from .session import DATABASE_URL, build_engine, open_database
from .tables import STUDENTS, Student

__all__ = [
    "AttributeSchema",
    "DATABASE_URL",
    "Record",
    "RecordDescriptor",
    "SQL_TYPES",
    "STUDENTS",
    "Student",
    "build_engine",
    "open_database",
    "record_model",
]
