"""
Simplest possible environment concept.

This is the canonical list-structured search: a dictionary of bindings
plus a static link to the enclosing scope, ending at the globals.
Closures hold on to these, so an environment lives as long as anything refers to it.
"""
from typing import Any, Optional
from .diagnostics import LoxRuntimeError
from .ontology import Token

class Environment:
	def __init__(self, enclosing:Optional["Environment"]=None):
		self._bindings : dict[str, Any] = {}
		self.enclosing = enclosing

	def define(self, name:str, value:Any):
		""" Re-defining a name in the same environment silently replaces it. """
		self._bindings[name] = value

	def get(self, name:Token) -> Any:
		env = self
		while env is not None:
			if name.lexeme in env._bindings: return env._bindings[name.lexeme]
			env = env.enclosing
		raise _undefined(name)

	def assign(self, name:Token, value:Any):
		env = self
		while env is not None:
			if name.lexeme in env._bindings:
				env._bindings[name.lexeme] = value
				return
			env = env.enclosing
		raise _undefined(name)

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance): env = env.enclosing
		return env

	def get_at(self, distance:int, name:str) -> Any:
		return self.ancestor(distance)._bindings[name]

	def assign_at(self, distance:int, name:Token, value:Any):
		self.ancestor(distance)._bindings[name.lexeme] = value

def _undefined(name:Token):
	return LoxRuntimeError(name, "Undefined variable '%s'." % name.lexeme)
