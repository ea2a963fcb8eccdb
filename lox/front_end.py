"""
Recursive descent over the token stream, one token of lookahead.

Precedence is expressed by layering, lowest first:
assignment, or, and, equality, comparison, term, factor, unary, call, primary.

On a syntax error the parser reports it, discards tokens up to the next
statement boundary, and carries on. A statement lost that way shows up
as None in the result, so callers must not run anything once the report is sick.
"""
from typing import Optional
from boozetools.parsing.interface import ParseError

from . import syntax
from .diagnostics import Report
from .ontology import Token, TokenType
from .scanner import scan

MAX_ARGS = 255

class LoxParseError(ParseError):
	""" No parse stack to speak of in recursive descent, so that part stays empty. """
	def __init__(self, token:Token, message:str):
		super().__init__((), token.type.name, token)
		self.message = message

T = TokenType

# Tokens that begin a statement; synchronization stops in front of these.
_STATEMENT_STARTERS = frozenset([T.CLASS, T.FUN, T.VAR, T.FOR, T.IF, T.WHILE, T.PRINT, T.RETURN])

class Parser:
	def __init__(self, tokens:list[Token], report:Report):
		self.tokens = tokens
		self.report = report
		self.current = 0

	def parse(self) -> list[Optional[syntax.Stmt]]:
		statements = []
		while not self.at_end():
			statements.append(self.declaration())
		return statements

	###########################################################################
	# Declarations and statements

	def declaration(self) -> Optional[syntax.Stmt]:
		try:
			if self.match(T.CLASS): return self.class_declaration()
			if self.match(T.FUN): return self.function("function")
			if self.match(T.VAR): return self.var_declaration()
			return self.statement()
		except LoxParseError:
			self.synchronize()
			return None

	def class_declaration(self) -> syntax.Class:
		name = self.consume(T.IDENTIFIER, "Expect class name.")
		superclass = None
		if self.match(T.LESS):
			superclass = syntax.Variable(self.consume(T.IDENTIFIER, "Expect superclass name."))
		self.consume(T.LEFT_BRACE, "Expect '{' before class body.")
		methods = []
		while not self.check(T.RIGHT_BRACE) and not self.at_end():
			methods.append(self.function("method"))
		self.consume(T.RIGHT_BRACE, "Expect '}' after class body.")
		return syntax.Class(name, superclass, methods)

	def function(self, kind:str) -> syntax.Function:
		name = self.consume(T.IDENTIFIER, "Expect %s name." % kind)
		self.consume(T.LEFT_PAREN, "Expect '(' after %s name." % kind)
		params = []
		if not self.check(T.RIGHT_PAREN):
			while True:
				if len(params) >= MAX_ARGS:
					self.error(self.peek(), "Can't have more than %d parameters." % MAX_ARGS)
				params.append(self.consume(T.IDENTIFIER, "Expect parameter name."))
				if not self.match(T.COMMA): break
		self.consume(T.RIGHT_PAREN, "Expect ')' after parameters.")
		self.consume(T.LEFT_BRACE, "Expect '{' before %s body." % kind)
		return syntax.Function(name, params, self.block())

	def var_declaration(self) -> syntax.Var:
		name = self.consume(T.IDENTIFIER, "Expect variable name.")
		initializer = self.expression() if self.match(T.EQUAL) else None
		self.consume(T.SEMICOLON, "Expect ';' after variable declaration.")
		return syntax.Var(name, initializer)

	def statement(self) -> syntax.Stmt:
		if self.match(T.FOR): return self.for_statement()
		if self.match(T.IF): return self.if_statement()
		if self.match(T.PRINT): return self.print_statement()
		if self.match(T.RETURN): return self.return_statement()
		if self.match(T.WHILE): return self.while_statement()
		if self.match(T.LEFT_BRACE): return syntax.Block(self.block())
		return self.expression_statement()

	def for_statement(self) -> syntax.Stmt:
		"""
		There is no for-loop node. It comes out as the equivalent
		block holding the initializer and a while-loop.
		"""
		self.consume(T.LEFT_PAREN, "Expect '(' after 'for'.")
		if self.match(T.SEMICOLON): initializer = None
		elif self.match(T.VAR): initializer = self.var_declaration()
		else: initializer = self.expression_statement()

		condition = None if self.check(T.SEMICOLON) else self.expression()
		self.consume(T.SEMICOLON, "Expect ';' after loop condition.")

		increment = None if self.check(T.RIGHT_PAREN) else self.expression()
		self.consume(T.RIGHT_PAREN, "Expect ')' after for clauses.")

		body = self.statement()
		if increment is not None:
			body = syntax.Block([body, syntax.Expression(increment)])
		if condition is None:
			condition = syntax.Literal(True)
		body = syntax.While(condition, body)
		if initializer is not None:
			body = syntax.Block([initializer, body])
		return body

	def if_statement(self) -> syntax.If:
		self.consume(T.LEFT_PAREN, "Expect '(' after 'if'.")
		condition = self.expression()
		self.consume(T.RIGHT_PAREN, "Expect ')' after if condition.")
		then_branch = self.statement()
		else_branch = self.statement() if self.match(T.ELSE) else None
		return syntax.If(condition, then_branch, else_branch)

	def print_statement(self) -> syntax.Print:
		value = self.expression()
		self.consume(T.SEMICOLON, "Expect ';' after value.")
		return syntax.Print(value)

	def return_statement(self) -> syntax.Return:
		keyword = self.previous()
		value = None if self.check(T.SEMICOLON) else self.expression()
		self.consume(T.SEMICOLON, "Expect ';' after return value.")
		return syntax.Return(keyword, value)

	def while_statement(self) -> syntax.While:
		self.consume(T.LEFT_PAREN, "Expect '(' after 'while'.")
		condition = self.expression()
		self.consume(T.RIGHT_PAREN, "Expect ')' after condition.")
		return syntax.While(condition, self.statement())

	def expression_statement(self) -> syntax.Expression:
		expr = self.expression()
		self.consume(T.SEMICOLON, "Expect ';' after expression.")
		return syntax.Expression(expr)

	def block(self) -> list[Optional[syntax.Stmt]]:
		statements = []
		while not self.check(T.RIGHT_BRACE) and not self.at_end():
			statements.append(self.declaration())
		self.consume(T.RIGHT_BRACE, "Expect '}' after block.")
		return statements

	###########################################################################
	# Expressions

	def expression(self) -> syntax.Expr:
		return self.assignment()

	def assignment(self) -> syntax.Expr:
		expr = self.logic_or()
		if self.match(T.EQUAL):
			equals = self.previous()
			value = self.assignment()
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.Get):
				return syntax.Set(expr.lhs, expr.name, value)
			# Reported, but the parser is not confused; no need to synchronize.
			self.error(equals, "Invalid assignment target.")
		return expr

	def logic_or(self) -> syntax.Expr:
		expr = self.logic_and()
		while self.match(T.OR):
			expr = syntax.Logical(expr, self.previous(), self.logic_and())
		return expr

	def logic_and(self) -> syntax.Expr:
		expr = self.equality()
		while self.match(T.AND):
			expr = syntax.Logical(expr, self.previous(), self.equality())
		return expr

	def _left_associative(self, operand, *operators) -> syntax.Expr:
		expr = operand()
		while self.match(*operators):
			expr = syntax.Binary(expr, self.previous(), operand())
		return expr

	def equality(self) -> syntax.Expr:
		return self._left_associative(self.comparison, T.BANG_EQUAL, T.EQUAL_EQUAL)

	def comparison(self) -> syntax.Expr:
		return self._left_associative(self.term, T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL)

	def term(self) -> syntax.Expr:
		return self._left_associative(self.factor, T.MINUS, T.PLUS)

	def factor(self) -> syntax.Expr:
		return self._left_associative(self.unary, T.SLASH, T.STAR)

	def unary(self) -> syntax.Expr:
		if self.match(T.BANG, T.MINUS):
			return syntax.Unary(self.previous(), self.unary())
		return self.call()

	def call(self) -> syntax.Expr:
		expr = self.primary()
		while True:
			if self.match(T.LEFT_PAREN):
				expr = self.finish_call(expr)
			elif self.match(T.DOT):
				name = self.consume(T.IDENTIFIER, "Expect property name after '.'.")
				expr = syntax.Get(expr, name)
			else:
				return expr

	def finish_call(self, callee:syntax.Expr) -> syntax.Call:
		args = []
		if not self.check(T.RIGHT_PAREN):
			while True:
				if len(args) >= MAX_ARGS:
					self.error(self.peek(), "Can't have more than %d arguments." % MAX_ARGS)
				args.append(self.expression())
				if not self.match(T.COMMA): break
		paren = self.consume(T.RIGHT_PAREN, "Expect ')' after arguments.")
		return syntax.Call(callee, paren, args)

	def primary(self) -> syntax.Expr:
		if self.match(T.FALSE): return syntax.Literal(False)
		if self.match(T.TRUE): return syntax.Literal(True)
		if self.match(T.NIL): return syntax.Literal(None)
		if self.match(T.NUMBER, T.STRING): return syntax.Literal(self.previous().literal)
		if self.match(T.SUPER):
			keyword = self.previous()
			self.consume(T.DOT, "Expect '.' after 'super'.")
			method = self.consume(T.IDENTIFIER, "Expect superclass method name.")
			return syntax.Super(keyword, method)
		if self.match(T.THIS): return syntax.This(self.previous())
		if self.match(T.IDENTIFIER): return syntax.Variable(self.previous())
		if self.match(T.LEFT_PAREN):
			expr = self.expression()
			self.consume(T.RIGHT_PAREN, "Expect ')' after expression.")
			return syntax.Grouping(expr)
		raise self.error(self.peek(), "Expect expression.")

	###########################################################################
	# Machinery

	def synchronize(self):
		""" Discard tokens until something that looks like the start of the next statement. """
		self.advance()
		while not self.at_end():
			if self.previous().type == T.SEMICOLON: return
			if self.peek().type in _STATEMENT_STARTERS: return
			self.advance()

	def error(self, token:Token, message:str) -> LoxParseError:
		self.report.error(token, message)
		return LoxParseError(token, message)

	def consume(self, kind:TokenType, message:str) -> Token:
		if self.check(kind): return self.advance()
		raise self.error(self.peek(), message)

	def match(self, *kinds:TokenType) -> bool:
		if any(self.check(k) for k in kinds):
			self.advance()
			return True
		return False

	def check(self, kind:TokenType) -> bool:
		return not self.at_end() and self.peek().type == kind

	def advance(self) -> Token:
		if not self.at_end(): self.current += 1
		return self.previous()

	def at_end(self) -> bool: return self.peek().type == T.EOF
	def peek(self) -> Token: return self.tokens[self.current]
	def previous(self) -> Token: return self.tokens[self.current - 1]

def parse(tokens:list[Token], report:Report) -> list[Optional[syntax.Stmt]]:
	statements = Parser(tokens, report).parse()
	report.info("Parsed", len(statements), "top-level statements")
	return statements

def parse_text(text:str, report:Report) -> list[Optional[syntax.Stmt]]:
	""" Submit text to scanner and parser. Check report.sick() before going any further. """
	return parse(scan(text, report), report)
