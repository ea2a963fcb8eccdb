"""
All the static scope analysis goes here.
By the time this pass is finished, every local variable reference knows
how many scopes out its binding lives, and every misplaced this/super/return
has been reported.
"""
from enum import Enum
from typing import Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .ontology import Token

class FunctionKind(Enum):
	NONE = "none"
	FUNCTION = "function"
	METHOD = "method"
	INITIALIZER = "initializer"

class ClassKind(Enum):
	NONE = "none"
	CLASS = "class"
	SUBCLASS = "subclass"

class Resolver(Visitor):
	"""
	This single top-down tree-walk does several things.

	* Track a stack of block scopes, mirroring the environments the interpreter will create.
	* Tell the interpreter the distance from each local reference to its binding.
	* Complain about redeclaration, self-reference in an initializer,
	  and this/super/return where they do not belong.

	Globals are not tracked: anything not found in a local scope is left
	for the interpreter to look up among the globals at run-time.
	It keeps going after an error, so one pass reports everything it can.
	"""
	_scopes: list[dict[str, bool]]

	def __init__(self, interpreter, report:Report):
		self.interpreter = interpreter
		self.report = report
		self._scopes = []
		self._function = FunctionKind.NONE
		self._class = ClassKind.NONE

	def tour(self, items:Sequence):
		for i in items: self.visit(i)

	def _begin_scope(self): self._scopes.append({})
	def _end_scope(self): self._scopes.pop()

	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.lexeme in scope:
			self.report.error(name, "Already a variable with this name in this scope.")
		scope[name.lexeme] = False

	def _define(self, name:Token):
		if self._scopes: self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:syntax.Expr, name:Token):
		for distance, scope in enumerate(reversed(self._scopes)):
			if name.lexeme in scope:
				self.interpreter.resolve(expr, distance)
				return

	def _resolve_function(self, fn:syntax.Function, kind:FunctionKind):
		enclosing = self._function
		self._function = kind
		self._begin_scope()
		for p in fn.params:
			self._declare(p)
			self._define(p)
		self.tour(fn.body)
		self._end_scope()
		self._function = enclosing

	# Statements

	def visit_Block(self, stmt:syntax.Block):
		self._begin_scope()
		self.tour(stmt.statements)
		self._end_scope()

	def visit_Class(self, stmt:syntax.Class):
		enclosing = self._class
		self._class = ClassKind.CLASS
		self._declare(stmt.name)
		self._define(stmt.name)

		if stmt.superclass is not None:
			if stmt.superclass.name.lexeme == stmt.name.lexeme:
				self.report.error(stmt.superclass.name, "A class can't inherit from itself.")
			self._class = ClassKind.SUBCLASS
			self.visit(stmt.superclass)
			self._begin_scope()
			self._scopes[-1]["super"] = True

		self._begin_scope()
		self._scopes[-1]["this"] = True
		for method in stmt.methods:
			kind = FunctionKind.INITIALIZER if method.name.lexeme == "init" else FunctionKind.METHOD
			self._resolve_function(method, kind)
		self._end_scope()

		if stmt.superclass is not None: self._end_scope()
		self._class = enclosing

	def visit_Expression(self, stmt:syntax.Expression): self.visit(stmt.expr)
	def visit_Print(self, stmt:syntax.Print): self.visit(stmt.expr)

	def visit_Function(self, stmt:syntax.Function):
		# Defined before the body resolves, so the function may call itself.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt, FunctionKind.FUNCTION)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.condition)
		self.visit(stmt.then_branch)
		if stmt.else_branch is not None: self.visit(stmt.else_branch)

	def visit_Return(self, stmt:syntax.Return):
		if self._function == FunctionKind.NONE:
			self.report.error(stmt.keyword, "Can't return from top-level code.")
		if stmt.value is not None:
			if self._function == FunctionKind.INITIALIZER:
				self.report.error(stmt.keyword, "Can't return a value from an initializer.")
			self.visit(stmt.value)

	def visit_Var(self, stmt:syntax.Var):
		self._declare(stmt.name)
		if stmt.initializer is not None: self.visit(stmt.initializer)
		self._define(stmt.name)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self.visit(stmt.body)

	# Expressions

	def visit_Literal(self, expr:syntax.Literal): pass
	def visit_Grouping(self, expr:syntax.Grouping): self.visit(expr.inner)
	def visit_Unary(self, expr:syntax.Unary): self.visit(expr.operand)

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Variable(self, expr:syntax.Variable):
		if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
			self.report.error(expr.name, "Can't read local variable in its own initializer.")
		self._resolve_local(expr, expr.name)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Properties are looked up dynamically; only the object expression has a scope.
		self.visit(expr.lhs)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.lhs)

	def visit_This(self, expr:syntax.This):
		if self._class == ClassKind.NONE:
			self.report.error(expr.keyword, "Can't use 'this' outside of a class.")
			return
		self._resolve_local(expr, expr.keyword)

	def visit_Super(self, expr:syntax.Super):
		if self._class == ClassKind.NONE:
			self.report.error(expr.keyword, "Can't use 'super' outside of a class.")
		elif self._class != ClassKind.SUBCLASS:
			self.report.error(expr.keyword, "Can't use 'super' in a class with no superclass.")
		self._resolve_local(expr, expr.keyword)

def resolve_words(statements:Sequence[syntax.Stmt], interpreter, report:Report):
	""" Fill in the interpreter's side-table of scope distances. Check report.sick() afterward. """
	Resolver(interpreter, report).tour(statements)
	report.info("Resolved", interpreter.nr_locals(), "local references")
