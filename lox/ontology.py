"""
These most-fundamental classes sit apart from the rest to avoid
circular imports: the token vocabulary the scanner produces, and
the two abstract roots of the syntax tree. The concrete node types
live in `syntax`, and every later pass works in terms of these.
"""
from enum import Enum, auto
from typing import Any, NamedTuple, Optional

class TokenType(Enum):
	# Single-character punctuation
	LEFT_PAREN = auto()
	RIGHT_PAREN = auto()
	LEFT_BRACE = auto()
	RIGHT_BRACE = auto()
	COMMA = auto()
	DOT = auto()
	MINUS = auto()
	PLUS = auto()
	SEMICOLON = auto()
	SLASH = auto()
	STAR = auto()

	# One or two characters
	BANG = auto()
	BANG_EQUAL = auto()
	EQUAL = auto()
	EQUAL_EQUAL = auto()
	GREATER = auto()
	GREATER_EQUAL = auto()
	LESS = auto()
	LESS_EQUAL = auto()

	# Literals
	IDENTIFIER = auto()
	STRING = auto()
	NUMBER = auto()

	# Keywords
	AND = auto()
	CLASS = auto()
	ELSE = auto()
	FALSE = auto()
	FOR = auto()
	FUN = auto()
	IF = auto()
	NIL = auto()
	OR = auto()
	PRINT = auto()
	RETURN = auto()
	SUPER = auto()
	THIS = auto()
	TRUE = auto()
	VAR = auto()
	WHILE = auto()

	EOF = auto()

KEYWORDS = {
	word: TokenType[word.upper()]
	for word in (
		"and", "class", "else", "false", "for", "fun", "if", "nil",
		"or", "print", "return", "super", "this", "true", "var", "while",
	)
}

class Token(NamedTuple):
	""" One lexeme, classified. The spot is its offset in the source text, for illustrations. """
	type: TokenType
	lexeme: str
	literal: Any
	line: int
	spot: Optional[int] = None

	def __str__(self): return "%s %s %s" % (self.type.name, self.lexeme, self.literal)

class Phrase:
	"""
	Root of the syntax tree. No __eq__ or __hash__ here:
	the resolver keys its side-table on node identity.
	"""
	def accept(self, visitor, *args):
		return visitor.visit(self, *args)

class Expr(Phrase): pass

class Stmt(Phrase): pass
