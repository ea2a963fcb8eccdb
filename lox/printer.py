"""
Render syntax trees as fully-parenthesized prefix notation, mainly for
seeing what the parser made of something. For example:

	-123 * (45.67)   ==>   (* (- 123) (group 45.67))
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .tree_walker.types import show

class AstPrinter(Visitor):

	def render(self, node) -> str:
		return node.accept(self)

	def _paren(self, head:str, *parts) -> str:
		words = [head]
		for p in parts:
			words.append(p if isinstance(p, str) else self.visit(p))
		return "(%s)" % " ".join(words)

	# Expressions

	def visit_Literal(self, expr:syntax.Literal): return show(expr.value)
	def visit_Grouping(self, expr:syntax.Grouping): return self._paren("group", expr.inner)
	def visit_Unary(self, expr:syntax.Unary): return self._paren(expr.op.lexeme, expr.operand)
	def visit_Binary(self, expr:syntax.Binary): return self._paren(expr.op.lexeme, expr.left, expr.right)
	def visit_Logical(self, expr:syntax.Logical): return self._paren(expr.op.lexeme, expr.left, expr.right)
	def visit_Variable(self, expr:syntax.Variable): return expr.name.lexeme
	def visit_Assign(self, expr:syntax.Assign): return self._paren("=", expr.name.lexeme, expr.value)
	def visit_Call(self, expr:syntax.Call): return self._paren("call", expr.callee, *expr.args)
	def visit_Get(self, expr:syntax.Get): return self._paren(".", expr.lhs, expr.name.lexeme)
	def visit_Set(self, expr:syntax.Set): return self._paren("=", expr.lhs, expr.name.lexeme, expr.value)
	def visit_This(self, expr:syntax.This): return "this"
	def visit_Super(self, expr:syntax.Super): return self._paren("super", expr.method.lexeme)

	# Statements

	def visit_Expression(self, stmt:syntax.Expression): return self._paren(";", stmt.expr)
	def visit_Print(self, stmt:syntax.Print): return self._paren("print", stmt.expr)

	def visit_Var(self, stmt:syntax.Var):
		if stmt.initializer is None: return self._paren("var", stmt.name.lexeme)
		return self._paren("var", stmt.name.lexeme, stmt.initializer)

	def visit_Block(self, stmt:syntax.Block): return self._paren("block", *stmt.statements)

	def visit_If(self, stmt:syntax.If):
		if stmt.else_branch is None: return self._paren("if", stmt.condition, stmt.then_branch)
		return self._paren("if", stmt.condition, stmt.then_branch, stmt.else_branch)

	def visit_While(self, stmt:syntax.While): return self._paren("while", stmt.condition, stmt.body)

	def visit_Function(self, stmt:syntax.Function):
		params = "(%s)" % " ".join(p.lexeme for p in stmt.params)
		return self._paren("fun", stmt.name.lexeme, params, *stmt.body)

	def visit_Return(self, stmt:syntax.Return):
		if stmt.value is None: return "(return)"
		return self._paren("return", stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		head = [stmt.name.lexeme]
		if stmt.superclass is not None: head += ["<", stmt.superclass.name.lexeme]
		return self._paren("class", *head, *stmt.methods)
