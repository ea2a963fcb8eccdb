"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.
"""
from abc import abstractmethod
from typing import Callable, Optional
from .. import syntax
from ..diagnostics import LoxRuntimeError
from ..environment import Environment
from ..ontology import Token
from .types import ARGS, VALUE, LoxValue

INITIALIZER = "init"

###############################################################################

class Function(LoxValue):
	""" A run-time object that can be called with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, interpreter, args: ARGS) -> VALUE: pass

class Primitive(Function):
	""" A function the host supplies, such as the clock. """
	def __init__(self, name:str, nr_params:int, fn: Callable):
		self.name = name
		self._nr_params = nr_params
		self._fn = fn

	def __str__(self): return "<fn %s>" % self.name
	def arity(self) -> int: return self._nr_params
	def call(self, interpreter, args: ARGS) -> VALUE: return self._fn(*args)

class Closure(Function):
	""" The run-time manifestation of a function declaration: a callable value tied to its natal environment. """
	# The same Closure type serves for plain functions, methods, and initializers.

	def __init__(self, declaration: syntax.Function, closure: Environment, is_initializer: bool):
		self._declaration = declaration
		self._closure = closure
		self._is_initializer = is_initializer

	def __str__(self): return "<fn %s>" % self._declaration.name.lexeme
	def arity(self) -> int: return len(self._declaration.params)

	def bind(self, instance: "Instance") -> "Closure":
		"""
		The sole place where a method becomes specific to an instance:
		a fresh scope defining `this`, wrapped around the method's own closure.
		"""
		env = Environment(self._closure)
		env.define("this", instance)
		return Closure(self._declaration, env, self._is_initializer)

	def call(self, interpreter, args: ARGS) -> VALUE:
		env = Environment(self._closure)
		for param, arg in zip(self._declaration.params, args):
			env.define(param.lexeme, arg)
		outcome = interpreter.execute_block(self._declaration.body, env)
		# An initializer always yields its instance, however the body finishes.
		if self._is_initializer: return self._closure.get_at(0, "this")
		if outcome is None: return None
		return outcome.value

class UserClass(Function):
	def __init__(self, name: str, superclass: Optional["UserClass"], methods: dict[str, Closure]):
		self.name = name
		self.superclass = superclass
		self._methods = methods

	def __str__(self): return self.name

	def find_method(self, name: str) -> Optional[Closure]:
		cls = self
		while cls is not None:
			if name in cls._methods: return cls._methods[name]
			cls = cls.superclass
		return None

	def arity(self) -> int:
		initializer = self.find_method(INITIALIZER)
		return 0 if initializer is None else initializer.arity()

	def call(self, interpreter, args: ARGS) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method(INITIALIZER)
		if initializer is not None:
			initializer.bind(instance).call(interpreter, args)
		return instance

class Instance(LoxValue):
	def __init__(self, cls: UserClass):
		self.cls = cls
		self._fields: dict[str, VALUE] = {}

	def __str__(self): return "%s instance" % self.cls.name

	def get(self, name: Token) -> VALUE:
		""" Fields shadow methods. A method comes back bound to this instance. """
		if name.lexeme in self._fields: return self._fields[name.lexeme]
		method = self.cls.find_method(name.lexeme)
		if method is not None: return method.bind(self)
		raise LoxRuntimeError(name, "Undefined property '%s'." % name.lexeme)

	def set(self, name: Token, value: VALUE):
		self._fields[name.lexeme] = value
