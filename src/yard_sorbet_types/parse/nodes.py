"""
The type-tree model. A parsed annotation is a list of these nodes; nested generics hold further nodes as children.

There are exactly four node variants and `TypeNode` names their union. The variants do not inherit from one another.
Consumers dispatch over all four (see `conversion.converter.TypeConverter.convert_type_node`).
"""
from dataclasses import dataclass
from typing import Tuple
from typing import Union

__all__ = ["SimpleType", "CollectionType", "FixedCollectionType", "HashCollectionType", "TypeNode"]


def _require_name(node: object, name: str) -> None:
    if not name:
        raise ValueError(f"{type(node).__name__} requires a non-empty name")


@dataclass(frozen=True)
class SimpleType:
    """A bare type name, e.g. `String`, `::Foo::Bar` or `#read`"""

    name: str

    def __post_init__(self) -> None:
        _require_name(self, self.name)


@dataclass(frozen=True)
class CollectionType:
    """An open generic, e.g. `Array<String, Symbol>`"""

    name: str
    types: Tuple["TypeNode", ...] = ()

    def __post_init__(self) -> None:
        _require_name(self, self.name)


@dataclass(frozen=True)
class FixedCollectionType:
    """A fixed-arity collection (tuple), e.g. `(String, Integer)`"""

    name: str
    types: Tuple["TypeNode", ...] = ()

    def __post_init__(self) -> None:
        _require_name(self, self.name)


@dataclass(frozen=True)
class HashCollectionType:
    """A key/value mapping, e.g. `Hash{Symbol => String}`"""

    name: str
    key_types: Tuple["TypeNode", ...] = ()
    value_types: Tuple["TypeNode", ...] = ()

    def __post_init__(self) -> None:
        _require_name(self, self.name)


TypeNode = Union[SimpleType, CollectionType, FixedCollectionType, HashCollectionType]
