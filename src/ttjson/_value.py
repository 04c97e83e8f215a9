"""Tagged value tree produced by the parser."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

type Payload = (
    None
    | bool
    | int
    | float
    | str
    | tuple[Value, ...]
    | Mapping[str, Value]
)


class ValueType(Enum):
    """Closed set of JSON value variants."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    LIST = "list"
    OBJECT = "object"


@dataclass(frozen=True)
class Value:
    """
    Immutable decoded JSON value.

    Exactly one payload is held, selected by ``value_type``. Containers own
    their children: lists are stored as tuples and objects behind a
    read-only mapping view of a private dict.
    """

    value_type: ValueType
    payload: Payload = None

    @classmethod
    def of_null(cls) -> Value:
        return cls(ValueType.NULL)

    @classmethod
    def of_bool(cls, value: bool) -> Value:
        return cls(ValueType.BOOL, value)

    @classmethod
    def of_int(cls, value: int) -> Value:
        return cls(ValueType.INT, value)

    @classmethod
    def of_double(cls, value: float) -> Value:
        return cls(ValueType.DOUBLE, value)

    @classmethod
    def of_string(cls, value: str) -> Value:
        return cls(ValueType.STRING, value)

    @classmethod
    def of_list(cls, items: Iterable[Value]) -> Value:
        return cls(ValueType.LIST, tuple(items))

    @classmethod
    def of_object(cls, members: Mapping[str, Value]) -> Value:
        return cls(ValueType.OBJECT, MappingProxyType(dict(members)))

    def __hash__(self) -> int:
        # Mapping views are unhashable; equal objects hash by member set
        if self.value_type is ValueType.OBJECT:
            return hash((self.value_type, frozenset(self.as_object().items())))
        return hash((self.value_type, self.payload))

    @property
    def is_null(self) -> bool:
        return self.value_type is ValueType.NULL

    @property
    def is_bool(self) -> bool:
        return self.value_type is ValueType.BOOL

    @property
    def is_int(self) -> bool:
        return self.value_type is ValueType.INT

    @property
    def is_double(self) -> bool:
        return self.value_type is ValueType.DOUBLE

    @property
    def is_string(self) -> bool:
        return self.value_type is ValueType.STRING

    @property
    def is_list(self) -> bool:
        return self.value_type is ValueType.LIST

    @property
    def is_object(self) -> bool:
        return self.value_type is ValueType.OBJECT

    def _expect(self, value_type: ValueType) -> Any:
        if self.value_type is not value_type:
            msg = (
                f"Value holds {self.value_type.value}, "
                f"not {value_type.value}"
            )
            raise TypeError(msg)
        return self.payload

    def as_bool(self) -> bool:
        return self._expect(ValueType.BOOL)

    def as_int(self) -> int:
        return self._expect(ValueType.INT)

    def as_double(self) -> float:
        return self._expect(ValueType.DOUBLE)

    def as_string(self) -> str:
        return self._expect(ValueType.STRING)

    def as_list(self) -> tuple[Value, ...]:
        return self._expect(ValueType.LIST)

    def as_object(self) -> Mapping[str, Value]:
        return self._expect(ValueType.OBJECT)

    def to_python(self) -> Any:
        """
        Converts the tree into plain Python objects.

        Lists become ``list`` and objects become ``dict``, matching what the
        standard library ``json`` module returns for the same document.
        """
        if self.value_type is ValueType.LIST:
            return [item.to_python() for item in self.as_list()]
        if self.value_type is ValueType.OBJECT:
            return {
                key: member.to_python()
                for key, member in self.as_object().items()
            }
        return self.payload
