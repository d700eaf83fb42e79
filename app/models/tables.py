"""Record types mapped by this package."""

from __future__ import annotations

from .base import record_model
from .schema import AttributeSchema, RecordDescriptor


STUDENTS = RecordDescriptor(
    "students",
    AttributeSchema(
        {
            "name": "text",
            "bio": "text",
            "tagline": "text",
        }
    ),
)

Student = record_model("Student", STUDENTS, module=__name__)
