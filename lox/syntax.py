"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate nodes in a top-down recursive descent.
The family is closed: every pass has a visit_ method for each concrete class in here.
"""
from typing import Any, Optional, Sequence
from .ontology import Expr, Stmt, Token

###############################################################################
# Expressions

class Literal(Expr):
	def __init__(self, value: Any): self.value = value
	def __repr__(self): return "<Literal %r>" % self.value

class Grouping(Expr):
	def __init__(self, inner: Expr): self.inner = inner

class Unary(Expr):
	def __init__(self, op: Token, operand: Expr):
		self.op, self.operand = op, operand

class Binary(Expr):
	def __init__(self, left: Expr, op: Token, right: Expr):
		self.left, self.op, self.right = left, op, right

class Logical(Binary):
	""" Short-circuit 'and' / 'or'. The value is whichever operand decided the outcome. """

class Variable(Expr):
	def __init__(self, name: Token): self.name = name
	def __repr__(self): return "<ref:%s>" % self.name.lexeme

class Assign(Expr):
	def __init__(self, name: Token, value: Expr):
		self.name, self.value = name, value

class Call(Expr):
	def __init__(self, callee: Expr, paren: Token, args: Sequence[Expr]):
		# The closing paren stands in for the call when reporting errors.
		self.callee, self.paren, self.args = callee, paren, args

class Get(Expr):
	def __init__(self, lhs: Expr, name: Token):
		self.lhs, self.name = lhs, name

class Set(Expr):
	def __init__(self, lhs: Expr, name: Token, value: Expr):
		self.lhs, self.name, self.value = lhs, name, value

class This(Expr):
	def __init__(self, keyword: Token): self.keyword = keyword

class Super(Expr):
	def __init__(self, keyword: Token, method: Token):
		self.keyword, self.method = keyword, method

###############################################################################
# Statements

class Expression(Stmt):
	def __init__(self, expr: Expr): self.expr = expr

class Print(Stmt):
	def __init__(self, expr: Expr): self.expr = expr

class Var(Stmt):
	def __init__(self, name: Token, initializer: Optional[Expr]):
		self.name, self.initializer = name, initializer

class Block(Stmt):
	def __init__(self, statements: Sequence[Stmt]): self.statements = statements

class If(Stmt):
	def __init__(self, condition: Expr, then_branch: Stmt, else_branch: Optional[Stmt]):
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch

class While(Stmt):
	def __init__(self, condition: Expr, body: Stmt):
		self.condition, self.body = condition, body

class Function(Stmt):
	def __init__(self, name: Token, params: Sequence[Token], body: Sequence[Stmt]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self):
		p = ", ".join(t.lexeme for t in self.params)
		return "{fun|%s(%s)}" % (self.name.lexeme, p)

class Return(Stmt):
	def __init__(self, keyword: Token, value: Optional[Expr]):
		self.keyword, self.value = keyword, value

class Class(Stmt):
	def __init__(self, name: Token, superclass: Optional[Variable], methods: Sequence[Function]):
		self.name, self.superclass, self.methods = name, superclass, methods
	def __repr__(self): return "{class|%s}" % self.name.lexeme

EXPRESSIONS = (Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call, Get, Set, This, Super)
STATEMENTS = (Expression, Print, Var, Block, If, While, Function, Return, Class)
