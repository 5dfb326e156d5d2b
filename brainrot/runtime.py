"""
The run-time value types the evaluator operates in terms of.

The set is closed. Booleans and null are singletons made once at import time,
so anything asking "is this the same boolean?" may (and should) use identity.
Errors are ordinary values here: the evaluator returns them through the same
channel as any other result rather than raising.
"""
from abc import ABC, abstractmethod
from typing import NamedTuple, Callable, Sequence, TYPE_CHECKING
from . import syntax

if TYPE_CHECKING:
	from .environment import Environment

INTEGER = "INTEGER"
BOOLEAN = "BOOLEAN"
NULL_KIND = "NULL"
STRING = "STRING"
ARRAY = "ARRAY"
HASH = "HASH"
FUNCTION = "FUNCTION"
BUILTIN = "BUILTIN"
ERROR = "ERROR"
RETURN_VALUE = "RETURN_VALUE"

class BrainrotObject(ABC):
	""" Root for everything a Brainrot program can compute """
	kind: str
	@abstractmethod
	def inspect(self) -> str: pass
	def __repr__(self): return "<%s %s>" % (self.kind, self.inspect())

class HashKey(NamedTuple):
	# Type-tag first, so values of different kinds never collide.
	kind: str
	value: object

class Hashable(BrainrotObject):
	""" The kinds of value that may serve as hash keys """
	value: object
	def hash_key(self) -> HashKey: return HashKey(self.kind, self.value)

###############################################################################

INT64_MIN = -2**63
INT64_SPAN = 2**64

def wrap_int64(n:int) -> int:
	""" Two's-complement wrap, to behave like a machine integer on overflow """
	return (n - INT64_MIN) % INT64_SPAN + INT64_MIN

class Integer(Hashable):
	kind = INTEGER
	def __init__(self, value:int): self.value = wrap_int64(value)
	def inspect(self): return str(self.value)

class Boolean(Hashable):
	kind = BOOLEAN
	def __init__(self, value:bool): self.value = value
	def inspect(self): return "based" if self.value else "cap"

class Null(BrainrotObject):
	kind = NULL_KIND
	def inspect(self): return "null"

class String(Hashable):
	kind = STRING
	def __init__(self, value:str): self.value = value
	def inspect(self): return self.value

TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()

def native_bool(value:bool) -> Boolean:
	return TRUE if value else FALSE

def is_truthy(it:BrainrotObject) -> bool:
	# Zero, empty strings and empty arrays all count as true.
	return it is not FALSE and it is not NULL

###############################################################################

class Array(BrainrotObject):
	kind = ARRAY
	def __init__(self, elements:Sequence[BrainrotObject]):
		self.elements = tuple(elements)
	def inspect(self): return "[%s]" % ", ".join(e.inspect() for e in self.elements)

class HashPair(NamedTuple):
	key: BrainrotObject
	value: BrainrotObject

class Hash(BrainrotObject):
	kind = HASH
	def __init__(self, pairs:dict[HashKey, HashPair]):
		self.pairs = pairs
	def inspect(self):
		return "{%s}" % ", ".join("%s: %s" % (p.key.inspect(), p.value.inspect()) for p in self.pairs.values())

class Function(BrainrotObject):
	""" The run-time manifestation of a function literal: code tied to its natal environment. """
	kind = FUNCTION
	def __init__(self, params:Sequence[syntax.Identifier], body:syntax.Block, env:"Environment"):
		self.params = params
		self.body = body
		self.env = env
	def inspect(self):
		return "vibe(%s) {\n%s\n}" % (", ".join(p.name for p in self.params), self.body)

class Builtin(BrainrotObject):
	""" A native function. It checks its own arguments and returns an Error when they won't do. """
	kind = BUILTIN
	def __init__(self, name:str, fn:Callable[..., BrainrotObject]):
		self.name = name
		self.fn = fn
	def inspect(self): return "builtin function"

class Error(BrainrotObject):
	kind = ERROR
	def __init__(self, message:str): self.message = message
	def inspect(self): return "ERROR: " + self.message

class ReturnSignal(BrainrotObject):
	"""
	Carries a `slay` value out through nested blocks.
	The function call that is executing unwraps it; it never escapes further.
	"""
	kind = RETURN_VALUE
	def __init__(self, value:BrainrotObject): self.value = value
	def inspect(self): return self.value.inspect()

def new_error(pattern:str, *args) -> Error:
	return Error(pattern % args)

def is_error(it:BrainrotObject) -> bool:
	return isinstance(it, Error)
