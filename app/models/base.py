"""Pydantic record base class and the builder that generates record types."""

from __future__ import annotations

from typing import Any, ClassVar, Optional, Sequence

from pydantic import BaseModel, ConfigDict
from sqlalchemy.engine import Engine

from .schema import RecordDescriptor


class Record(BaseModel):
    """Base class for a row-to-be, with one field per schema attribute."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    record_descriptor: ClassVar[RecordDescriptor]

    @classmethod
    def descriptor(cls) -> RecordDescriptor:
        return cls.record_descriptor

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> "Record":
        names = cls.record_descriptor.attribute_names()
        if len(values) != len(names):
            raise ValueError(f"{cls.__name__} takes {len(names)} values, got {len(values)}")
        return cls(**dict(zip(names, values)))

    def insert_values(self) -> list[Any]:
        return [getattr(self, name) for name in self.record_descriptor.attribute_names()]

    def save(self, engine: Engine) -> None:
        """Insert the current values as a new row. Every call adds a row."""
        self.record_descriptor.insert(engine, self.insert_values())

    def __repr__(self) -> str:
        attrs = [f"{name}={getattr(self, name)!r}" for name in self.record_descriptor.attribute_names()]
        return f"<{self.__class__.__name__} {' '.join(attrs)}>"


def record_model(class_name: str, descriptor: RecordDescriptor, module: str | None = None) -> type[Record]:
    """Build the concrete record class for ``descriptor``.

    Fields follow the schema order and are typed from the declared SQL type;
    every field is optional and defaults to ``None``.
    """
    annotations: dict[str, Any] = {}
    namespace: dict[str, Any] = {
        "__module__": module or __name__,
        "__qualname__": class_name,
        "__annotations__": annotations,
        "record_descriptor": descriptor,
    }
    for name in descriptor.attribute_names():
        if hasattr(Record, name) or name in Record.__class_vars__ or name.startswith("model_"):
            raise ValueError(f"Attribute {name!r} clashes with a Record method")
        # pydantic treats underscore names as private attributes, not fields
        if name.startswith("_"):
            raise ValueError(f"Attribute {name!r} cannot start with an underscore")
        annotations[name] = Optional[descriptor.schema.python_type(name)]
        namespace[name] = None
    return type(Record)(class_name, (Record,), namespace)
