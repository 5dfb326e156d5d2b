"""
Simplest possible environment concept.

This is the canonical list-structured search: each scope knows its own
bindings and the scope it was created inside. A closure holds on to the
scope it was born in, so that scope lives as long as the closure does.
"""
from typing import Optional
from .runtime import BrainrotObject
from .primitive import BUILTINS

class Environment:
	def __init__(self, outer:Optional["Environment"]=None):
		self._bindings: dict[str, BrainrotObject] = {}
		self.outer = outer

	def resolve(self, name:str) -> Optional[BrainrotObject]:
		"""
		Innermost binding wins. After the outermost scope come the builtins.
		None means nobody has heard of this name.
		"""
		env = self
		while env is not None:
			try: return env._bindings[name]
			except KeyError: env = env.outer
		return BUILTINS.get(name)

	def bind(self, name:str, value:BrainrotObject) -> BrainrotObject:
		""" Writes only ever land in this scope, possibly shadowing an outer one. """
		self._bindings[name] = value
		return value

	def enclosed(self) -> "Environment":
		return Environment(self)
