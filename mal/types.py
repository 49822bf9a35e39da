from dataclasses import dataclass, field
from typing import Union

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

# Value: Atom | List | Vector | HashMap
# Atoms are hashable and double as hash-map keys.


@dataclass(frozen=True)
class Atom:
    """Base of the leaf variants below; only its subclasses are constructed."""

    type_name = "atom"

    def __new__(cls, *args, **kwargs):
        if cls is Atom:
            raise TypeError("Atom cannot be instantiated directly")
        return super().__new__(cls)


@dataclass(frozen=True)
class Symbol(Atom):
    name: str
    type_name = "symbol"


@dataclass(frozen=True)
class Keyword(Atom):
    name: str
    type_name = "keyword"


@dataclass(frozen=True)
class String(Atom):
    """A string atom; `value` holds the un-escaped contents."""

    value: str
    type_name = "string"


@dataclass(frozen=True)
class Int(Atom):
    value: int
    type_name = "int"

    def __post_init__(self):
        if not INT_MIN <= self.value <= INT_MAX:
            raise ValueError(f"integer out of 32-bit range: {self.value}")


@dataclass(frozen=True)
class Nil(Atom):
    type_name = "nil"


@dataclass(frozen=True)
class Boolean(Atom):
    value: bool
    type_name = "boolean"


NIL = Nil()
TRUE = Boolean(True)
FALSE = Boolean(False)


@dataclass(frozen=True)
class List:
    items: tuple = ()
    type_name = "list"

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class Vector(List):
    type_name = "vector"


@dataclass(frozen=True, eq=True)
class HashMap:
    items: dict = field(default_factory=dict)
    type_name = "hashmap"

    __hash__ = None

    def __len__(self):
        return len(self.items)

    def __getitem__(self, key: Atom):
        return self.items[key]


Value = Union[Atom, List, Vector, HashMap]
