"""
The tree-walking evaluator proper.

Expressions evaluate to values. Statements execute for effect and yield None,
except that `return` yields a Returning outcome which unwinds, by ordinary
function return, as far as the nearest call boundary.
Run-time errors are exceptions and unwind all the way to `interpret`.
"""
import math
import operator
import sys
import time
from typing import Sequence
from boozetools.support.foundation import Visitor
from .. import syntax
from ..diagnostics import Report, LoxRuntimeError
from ..environment import Environment
from ..ontology import Token, TokenType
from .types import VALUE, OUTCOME, Returning, is_truthy, is_equal, show
from .values import Function, Primitive, Closure, UserClass, Instance, INITIALIZER

def _divide(a:float, b:float) -> float:
	# Follow IEEE-754 rather than Python's ZeroDivisionError.
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

PRIMITIVE_BINARY = {
	TokenType.MINUS         : operator.sub,
	TokenType.STAR          : operator.mul,
	TokenType.SLASH         : _divide,
	TokenType.GREATER       : operator.gt,
	TokenType.GREATER_EQUAL : operator.ge,
	TokenType.LESS          : operator.lt,
	TokenType.LESS_EQUAL    : operator.le,
}

def _check_number(op:Token, operand:VALUE):
	if not isinstance(operand, float):
		raise LoxRuntimeError(op, "Operand must be a number.")

def _check_numbers(op:Token, a:VALUE, b:VALUE):
	if not (isinstance(a, float) and isinstance(b, float)):
		raise LoxRuntimeError(op, "Operands must be numbers.")

class Interpreter(Visitor):
	"""
	One of these lives for the whole of a session. The globals persist,
	as does the side-table of scope distances the resolver fills in.
	"""
	def __init__(self, report:Report, out=None):
		self.report = report
		self._out = out
		self.globals = Environment()
		self.environment = self.globals
		self._locals = {}
		self.globals.define("clock", Primitive("clock", 0, time.time))

	# Hooks for the resolver:
	def resolve(self, expr:syntax.Expr, distance:int):
		self._locals[expr] = distance

	def nr_locals(self): return len(self._locals)

	# Running things:
	def interpret(self, statements:Sequence[syntax.Stmt]):
		try:
			for stmt in statements:
				self.execute(stmt)
		except LoxRuntimeError as ex:
			self.report.runtime_error(ex)

	def evaluate(self, expr:syntax.Expr) -> VALUE:
		return self.visit(expr)

	def execute(self, stmt:syntax.Stmt) -> OUTCOME:
		return self.visit(stmt)

	def execute_block(self, statements:Sequence[syntax.Stmt], env:Environment) -> OUTCOME:
		previous = self.environment
		try:
			self.environment = env
			for stmt in statements:
				outcome = self.execute(stmt)
				if outcome is not None: return outcome
		finally:
			self.environment = previous

	def _look_up(self, name:Token, expr:syntax.Expr) -> VALUE:
		try: distance = self._locals[expr]
		except KeyError: return self.globals.get(name)
		else: return self.environment.get_at(distance, name.lexeme)

	def _emit(self, text:str):
		print(text, file=sys.stdout if self._out is None else self._out)

	###########################################################################
	# Statements

	def visit_Expression(self, stmt:syntax.Expression):
		self.evaluate(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		self._emit(show(self.evaluate(stmt.expr)))

	def visit_Var(self, stmt:syntax.Var):
		value = None if stmt.initializer is None else self.evaluate(stmt.initializer)
		self.environment.define(stmt.name.lexeme, value)

	def visit_Block(self, stmt:syntax.Block) -> OUTCOME:
		return self.execute_block(stmt.statements, Environment(self.environment))

	def visit_If(self, stmt:syntax.If) -> OUTCOME:
		if is_truthy(self.evaluate(stmt.condition)):
			return self.execute(stmt.then_branch)
		elif stmt.else_branch is not None:
			return self.execute(stmt.else_branch)

	def visit_While(self, stmt:syntax.While) -> OUTCOME:
		while is_truthy(self.evaluate(stmt.condition)):
			outcome = self.execute(stmt.body)
			if outcome is not None: return outcome

	def visit_Function(self, stmt:syntax.Function):
		self.environment.define(stmt.name.lexeme, Closure(stmt, self.environment, False))

	def visit_Return(self, stmt:syntax.Return) -> Returning:
		return Returning(None if stmt.value is None else self.evaluate(stmt.value))

	def visit_Class(self, stmt:syntax.Class):
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass)
			if not isinstance(superclass, UserClass):
				raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

		self.environment.define(stmt.name.lexeme, None)
		env = self.environment
		if superclass is not None:
			env = Environment(env)
			env.define("super", superclass)

		methods = {
			m.name.lexeme: Closure(m, env, m.name.lexeme == INITIALIZER)
			for m in stmt.methods
		}
		self.environment.assign(stmt.name, UserClass(stmt.name.lexeme, superclass, methods))

	###########################################################################
	# Expressions

	def visit_Literal(self, expr:syntax.Literal): return expr.value
	def visit_Grouping(self, expr:syntax.Grouping): return self.evaluate(expr.inner)

	def visit_Unary(self, expr:syntax.Unary):
		operand = self.evaluate(expr.operand)
		if expr.op.type == TokenType.BANG:
			return not is_truthy(operand)
		_check_number(expr.op, operand)
		return -operand

	def visit_Binary(self, expr:syntax.Binary):
		a = self.evaluate(expr.left)
		b = self.evaluate(expr.right)
		kind = expr.op.type
		if kind == TokenType.EQUAL_EQUAL: return is_equal(a, b)
		if kind == TokenType.BANG_EQUAL: return not is_equal(a, b)
		if kind == TokenType.PLUS:
			if isinstance(a, float) and isinstance(b, float): return a + b
			if isinstance(a, str) and isinstance(b, str): return a + b
			raise LoxRuntimeError(expr.op, "Operands must be two numbers or two strings.")
		_check_numbers(expr.op, a, b)
		return PRIMITIVE_BINARY[kind](a, b)

	def visit_Logical(self, expr:syntax.Logical):
		lhs = self.evaluate(expr.left)
		if expr.op.type == TokenType.OR:
			if is_truthy(lhs): return lhs
		elif not is_truthy(lhs):
			return lhs
		return self.evaluate(expr.right)

	def visit_Variable(self, expr:syntax.Variable):
		return self._look_up(expr.name, expr)

	def visit_Assign(self, expr:syntax.Assign):
		value = self.evaluate(expr.value)
		try: distance = self._locals[expr]
		except KeyError: self.globals.assign(expr.name, value)
		else: self.environment.assign_at(distance, expr.name, value)
		return value

	def visit_Call(self, expr:syntax.Call):
		callee = self.evaluate(expr.callee)
		args = [self.evaluate(a) for a in expr.args]
		if not isinstance(callee, Function):
			raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
		if len(args) != callee.arity():
			pattern = "Expected %d arguments but got %d."
			raise LoxRuntimeError(expr.paren, pattern % (callee.arity(), len(args)))
		try: return callee.call(self, args)
		except RecursionError:
			raise LoxRuntimeError(expr.paren, "Stack overflow.") from None

	def visit_Get(self, expr:syntax.Get):
		lhs = self.evaluate(expr.lhs)
		if isinstance(lhs, Instance): return lhs.get(expr.name)
		raise LoxRuntimeError(expr.name, "Only instances have properties.")

	def visit_Set(self, expr:syntax.Set):
		lhs = self.evaluate(expr.lhs)
		if not isinstance(lhs, Instance):
			raise LoxRuntimeError(expr.name, "Only instances have fields.")
		value = self.evaluate(expr.value)
		lhs.set(expr.name, value)
		return value

	def visit_This(self, expr:syntax.This):
		return self._look_up(expr.keyword, expr)

	def visit_Super(self, expr:syntax.Super):
		# The method comes from the lexically enclosing class's superclass,
		# but `this` is whatever instance the current call is bound to.
		distance = self._locals[expr]
		superclass = self.environment.get_at(distance, "super")
		instance = self.environment.get_at(distance - 1, "this")
		method = superclass.find_method(expr.method.lexeme)
		if method is None:
			raise LoxRuntimeError(expr.method, "Undefined property '%s'." % expr.method.lexeme)
		return method.bind(instance)
