"""
Text in, tokens out. The lexical rules are a booze-tools miniscan definition;
the Scanner walks the raw lexemes it produces, keeping track of line and offset.
Scan errors get reported but never stop the scan.

Every rule yields a lexeme, even whitespace and comments,
so that the running offset always agrees with the source text.
"""
from boozetools.scanning import miniscan
from .diagnostics import Report
from .ontology import Token, TokenType, KEYWORDS

_PUNCTUATION = {
	"(": TokenType.LEFT_PAREN,
	")": TokenType.RIGHT_PAREN,
	"{": TokenType.LEFT_BRACE,
	"}": TokenType.RIGHT_BRACE,
	",": TokenType.COMMA,
	".": TokenType.DOT,
	"-": TokenType.MINUS,
	"+": TokenType.PLUS,
	";": TokenType.SEMICOLON,
	"*": TokenType.STAR,
	"/": TokenType.SLASH,
	"!": TokenType.BANG,
	"!=": TokenType.BANG_EQUAL,
	"=": TokenType.EQUAL,
	"==": TokenType.EQUAL_EQUAL,
	"<": TokenType.LESS,
	"<=": TokenType.LESS_EQUAL,
	">": TokenType.GREATER,
	">=": TokenType.GREATER_EQUAL,
}

LEXICON = miniscan.Definition()

def _rule(kind:str, pattern:str):
	@LEXICON.on(pattern)
	def action(yy): yy.token(kind, yy.match())

_rule("blank", r"[\ \t\r\n]+")
_rule("comment", r"\/\/[^\n]*")
_rule("punctuation", r"[\-\(\)\{\},\.\+;\*/]")
_rule("punctuation", r"[!=<>]=?")
# A trailing dot is not part of the number unless a digit follows it.
_rule("number", r"[0-9]+(\.[0-9]+)?")
_rule("string", r'"[^"]*"')
# Longest match means this wins only when the closing quote never comes.
_rule("open_string", r'"[^"]*')
_rule("word", r"[A-Za-z_][A-Za-z_0-9]*")
_rule("stray", r'[^\-\(\)\{\},\.\+;\*/!=<>"0-9A-Za-z_\ \t\r\n]')

class Scanner:
	def __init__(self, source:str, report:Report):
		self.source = source
		self.report = report
		self.tokens = []
		self.start = 0
		self.line = 1

	def scan_tokens(self) -> list[Token]:
		for kind, text in LEXICON.scan(self.source):
			getattr(self, "scan_"+kind)(text)
			self.start += len(text)
			self.line += text.count("\n")
		self.tokens.append(Token(TokenType.EOF, "", None, self.line, len(self.source)))
		return self.tokens

	def scan_blank(self, text): pass
	def scan_comment(self, text): pass

	def scan_punctuation(self, text): self.add_token(_PUNCTUATION[text], text)
	def scan_number(self, text): self.add_token(TokenType.NUMBER, text, float(text))
	def scan_string(self, text): self.add_token(TokenType.STRING, text, text[1:-1])

	def scan_open_string(self, text):
		self.report.scan_error(self.line, "Unterminated string.", self.start)

	def scan_word(self, text):
		self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER), text)

	def scan_stray(self, text):
		self.report.scan_error(self.line, "Unexpected character.", self.start)

	def add_token(self, kind:TokenType, lexeme:str, literal=None):
		# The line is where the lexeme starts, which matters for multi-line strings.
		self.tokens.append(Token(kind, lexeme, literal, self.line, self.start))

def scan(source:str, report:Report) -> list[Token]:
	tokens = Scanner(source, report).scan_tokens()
	report.info("Scanned", len(tokens), "tokens")
	return tokens
