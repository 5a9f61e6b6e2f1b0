"""Document model handed to index writers.

An IndexDocument maps field names to IndexFields. Each field holds an ordered
list of values; the writer serializes every value as a string, so values are
restricted to strings and temporal values (dates and datetimes).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

FieldValue = Union[str, date, datetime]


def format_field_value(value: Any) -> str:
    """Return the string emitted for a single field value.

    - str: verbatim
    - datetime / date: ISO-8601 via isoformat()

    Anything else is rejected rather than stringified.
    """
    if isinstance(value, str):
        return value
    # datetime is a subclass of date
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(
        f"Unsupported field value type {type(value).__name__}: "
        f"expected str, date or datetime"
    )


@dataclass
class IndexField:
    values: List[Any] = field(default_factory=list)
    weight: float = 1.0

    def add(self, value: Any) -> None:
        self.values.append(value)

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class IndexDocument:
    fields: Dict[str, IndexField] = field(default_factory=dict)
    weight: float = 1.0

    def add(self, name: str, value: Any) -> None:
        """Append `value` to field `name`, creating the field if needed."""
        existing = self.fields.get(name)
        if existing is None:
            self.fields[name] = IndexField(values=[value])
        else:
            existing.add(value)

    def get_field(self, name: str) -> Optional[IndexField]:
        return self.fields.get(name)

    def get_field_value(self, name: str) -> Optional[Any]:
        """First value of field `name`, or None when absent or empty."""
        f = self.fields.get(name)
        if f is None or not f.values:
            return None
        return f.values[0]

    def remove_field(self, name: str) -> Optional[IndexField]:
        return self.fields.pop(name, None)

    def field_names(self) -> List[str]:
        return list(self.fields)

    def __iter__(self) -> Iterator[Tuple[str, IndexField]]:
        return iter(self.fields.items())

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    @classmethod
    def from_dict(cls, fields: Dict[str, Any], weight: float = 1.0) -> "IndexDocument":
        """Build a document from `{name: value_or_list_of_values}`."""
        doc = cls(weight=weight)
        for name, values in fields.items():
            if isinstance(values, (list, tuple)):
                doc.fields[name] = IndexField(values=list(values))
            else:
                doc.fields[name] = IndexField(values=[values])
        return doc
