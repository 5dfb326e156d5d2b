"""
Build the primitive namespace.

Identifier lookup falls back on these once the environment chain runs out.
Each one polices its own arity and argument kinds, answering with an Error
value rather than raising.
"""
from .runtime import (
	BrainrotObject, Builtin, Integer, String, Array, NULL, ARRAY,
	new_error,
)

BUILTINS: dict[str, Builtin] = {}

def _builtin(name:str, arity:int=None):
	def register(fn):
		def checked(*args:BrainrotObject) -> BrainrotObject:
			if arity is not None and len(args) != arity:
				return new_error("wrong number of arguments. got=%d, want=%d", len(args), arity)
			return fn(*args)
		BUILTINS[name] = Builtin(name, checked)
		return fn
	return register

def _must_be_array(name:str, it:BrainrotObject):
	if it.kind != ARRAY:
		return new_error("argument to `%s` must be ARRAY, got %s", name, it.kind)

@_builtin("rizzLevel", 1)
def rizz_level(it):
	if isinstance(it, String): return Integer(len(it.value.encode("utf-8")))
	if isinstance(it, Array): return Integer(len(it.elements))
	return new_error("argument to `rizzLevel` not supported, got %s", it.kind)

@_builtin("mainCharacter", 1)
def main_character(it):
	return _must_be_array("mainCharacter", it) or (it.elements[0] if it.elements else NULL)

@_builtin("finalBoss", 1)
def final_boss(it):
	return _must_be_array("finalBoss", it) or (it.elements[-1] if it.elements else NULL)

@_builtin("npcs", 1)
def npcs(it):
	return _must_be_array("npcs", it) or (Array(it.elements[1:]) if it.elements else NULL)

@_builtin("pushP", 2)
def push_p(it, item):
	return _must_be_array("pushP", it) or Array(it.elements + (item,))

@_builtin("spill")
def spill(*args):
	for a in args: print(a.inspect())
	return NULL
