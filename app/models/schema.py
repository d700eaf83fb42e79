"""Attribute schemas and the descriptors that turn them into SQL."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping

from sqlalchemy import text
from sqlalchemy.engine import Engine


logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Declared SQL type -> Python type of the generated record field.
SQL_TYPES: Mapping[str, type] = MappingProxyType(
    {
        "text": str,
        "integer": int,
        "real": float,
        "numeric": float,
        "blob": bytes,
    }
)


def _check_identifier(value: str, what: str) -> str:
    if not isinstance(value, str) or not _IDENTIFIER.match(value):
        raise ValueError(f"Invalid {what} {value!r}: expected a plain SQL identifier")
    return value


class AttributeSchema:
    """Ordered, immutable mapping of attribute name to declared SQL type.

    Declaration order is column order, both in the table definition and in the
    ``INSERT`` statement. Types are stored lower-cased.
    """

    def __init__(self, attributes: Mapping[str, str]) -> None:
        if not attributes:
            raise ValueError("An attribute schema needs at least one attribute")
        columns: dict[str, str] = {}
        seen: set[str] = set()
        for name, sql_type in attributes.items():
            _check_identifier(name, "attribute name")
            if name.lower() in seen:
                raise ValueError(f"Duplicate attribute {name!r}")
            seen.add(name.lower())
            declared = str(sql_type).lower()
            if declared not in SQL_TYPES:
                raise ValueError(
                    f"Unsupported type {sql_type!r} for attribute {name!r}; "
                    f"expected one of {', '.join(SQL_TYPES)}"
                )
            columns[name] = declared
        self._columns = MappingProxyType(columns)

    @property
    def columns(self) -> Mapping[str, str]:
        return self._columns

    def names(self) -> tuple[str, ...]:
        return tuple(self._columns)

    def python_type(self, name: str) -> type:
        return SQL_TYPES[self._columns[name]]

    def __iter__(self):
        return iter(self._columns.items())

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"<AttributeSchema {dict(self._columns)!r}>"


class RecordDescriptor:
    """Owns a table name and its schema, and renders every statement for it."""

    def __init__(self, table_name: str, schema: AttributeSchema | Mapping[str, str]) -> None:
        self._table_name = _check_identifier(table_name, "table name")
        self._schema = schema if isinstance(schema, AttributeSchema) else AttributeSchema(schema)

    @property
    def schema(self) -> AttributeSchema:
        return self._schema

    def table_name(self) -> str:
        return self._table_name

    def attribute_names(self) -> tuple[str, ...]:
        return self._schema.names()

    def attributes(self) -> Mapping[str, str]:
        return self._schema.columns

    def column_definitions_sql(self) -> str:
        return ",".join(f"{name.lower()} {sql_type.upper()}" for name, sql_type in self._schema)

    # Table name and column clause come from the schema, so they are written
    # into the statement text; only values are ever bound.
    def create_table_sql(self, if_not_exists: bool = False) -> str:
        guard = "IF NOT EXISTS " if if_not_exists else ""
        return f"CREATE TABLE {guard}{self._table_name} ({self.column_definitions_sql()})"

    def insert_sql(self) -> str:
        names = self.attribute_names()
        columns = ",".join(names)
        placeholders = ",".join(f":{name}" for name in names)
        return f"INSERT INTO {self._table_name} ({columns}) VALUES ({placeholders})"

    def create_table(self, engine: Engine) -> None:
        """Create the table, failing if it already exists."""
        logger.info("Creating table %s", self._table_name)
        with engine.begin() as connection:
            connection.execute(text(self.create_table_sql()))

    def ensure_table_exists(self, engine: Engine) -> None:
        """Create the table unless it is already there. Safe to call repeatedly."""
        logger.info("Ensuring table %s exists", self._table_name)
        with engine.begin() as connection:
            connection.execute(text(self.create_table_sql(if_not_exists=True)))

    def insert(self, engine: Engine, values: list[object]) -> None:
        names = self.attribute_names()
        if len(values) != len(names):
            raise ValueError(f"Expected {len(names)} values for {self._table_name}, got {len(values)}")
        logger.debug("Inserting row into %s (%d columns)", self._table_name, len(names))
        with engine.begin() as connection:
            connection.execute(text(self.insert_sql()), dict(zip(names, values)))

    def __repr__(self) -> str:
        return f"<RecordDescriptor {self._table_name} {list(self.attribute_names())!r}>"
