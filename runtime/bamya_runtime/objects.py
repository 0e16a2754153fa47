"""
Bamya Object System

Runtime values produced by the evaluator. Every value reports a type tag
and an inspect() rendering. TRUE, FALSE and NULL are module singletons;
the evaluator compares them by identity, so nothing may construct fresh
Boolean or Null values on an evaluation path.

Integers, booleans and strings can be used as hash keys through
hash_key(), which returns a HashKey (type tag plus numeric value).
"""

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List

if TYPE_CHECKING:
    from .ast_nodes import BlockStatement, Identifier
    from .environment import Environment


class ObjectType:
    """Object type tags"""
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    NULL = "NULL"
    ARRAY = "ARRAY"
    HASH = "HASH"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class HashKey:
    """Comparable stand-in for a value used as a hash key"""
    type: str
    value: int


class BamyaObject:
    """Base runtime value"""

    def type(self) -> str:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


# ============================================================================
# Scalars
# ============================================================================

@dataclass(frozen=True)
class Integer(BamyaObject):
    value: int

    def type(self) -> str:
        return ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.INTEGER, self.value)


@dataclass(frozen=True, eq=False)
class Boolean(BamyaObject):
    value: bool

    def type(self) -> str:
        return ObjectType.BOOLEAN

    def inspect(self) -> str:
        return 'true' if self.value else 'false'

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.BOOLEAN, 1 if self.value else 0)


@dataclass(frozen=True)
class String(BamyaObject):
    value: str

    def type(self) -> str:
        return ObjectType.STRING

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        digest = hashlib.blake2b(self.value.encode('utf-8'), digest_size=8).digest()
        return HashKey(ObjectType.STRING, int.from_bytes(digest, 'big'))


class Null(BamyaObject):

    def type(self) -> str:
        return ObjectType.NULL

    def inspect(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'Null()'


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()

HASHABLE_TYPES = (Integer, Boolean, String)


def native_bool_to_boolean(value: bool) -> Boolean:
    """Map a Python bool onto the canonical TRUE/FALSE singletons"""
    return TRUE if value else FALSE


# ============================================================================
# Collections
# ============================================================================

@dataclass(eq=False)
class Array(BamyaObject):
    elements: List[BamyaObject] = field(default_factory=list)

    def type(self) -> str:
        return ObjectType.ARRAY

    def inspect(self) -> str:
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'


@dataclass(frozen=True)
class HashPair:
    """Original key object kept next to its value"""
    key: BamyaObject
    value: BamyaObject


@dataclass(eq=False)
class Hash(BamyaObject):
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)

    def type(self) -> str:
        return ObjectType.HASH

    def inspect(self) -> str:
        items = ', '.join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return '{' + items + '}'


# ============================================================================
# Callables
# ============================================================================

@dataclass(eq=False)
class Function(BamyaObject):
    """User function closing over the environment it was defined in"""
    parameters: List['Identifier']
    body: 'BlockStatement'
    env: 'Environment' = field(repr=False)

    def type(self) -> str:
        return ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


BuiltinFunction = Callable[..., BamyaObject]


@dataclass(eq=False)
class Builtin(BamyaObject):
    """Native function callable from Bamya code"""
    fn: BuiltinFunction

    def type(self) -> str:
        return ObjectType.BUILTIN

    def inspect(self) -> str:
        return 'builtin function'


# ============================================================================
# Control-flow sentinels
# ============================================================================

@dataclass(eq=False)
class ReturnValue(BamyaObject):
    value: BamyaObject

    def type(self) -> str:
        return ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(eq=False)
class Error(BamyaObject):
    message: str

    def type(self) -> str:
        return ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


def new_error(message: str) -> Error:
    return Error(message)


def is_error(obj) -> bool:
    return obj is not None and obj.type() == ObjectType.ERROR


__all__ = [
    'ObjectType', 'HashKey', 'BamyaObject',
    'Integer', 'Boolean', 'String', 'Null',
    'TRUE', 'FALSE', 'NULL', 'HASHABLE_TYPES', 'native_bool_to_boolean',
    'Array', 'HashPair', 'Hash', 'Function', 'Builtin', 'BuiltinFunction',
    'ReturnValue', 'Error', 'new_error', 'is_error',
]
