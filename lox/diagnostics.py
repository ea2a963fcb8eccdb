"""
Everything to do with telling the user what went wrong.

Static problems (scan, parse, resolve) accumulate in a Report,
each one announced the moment it is found. Run-time problems
arrive as LoxRuntimeError and get announced in their own format.
"""
import sys
from pathlib import Path
from typing import NamedTuple, Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Token, TokenType

class LoxRuntimeError(Exception):
	""" Thrown at the exact operation that fails; unwinds to the top-level interpret call. """
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message

class Yuck(Exception):
	"""
	The first argument will be the name of the phase fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class Diagnostic(NamedTuple):
	line: int
	where: str
	message: str
	spot: Optional[int] = None
	width: int = 1

	def as_text(self):
		return "[line %d] Error%s: %s" % (self.line, self.where, self.message)

def _where(token:Token) -> str:
	if token.type == TokenType.EOF: return " at end"
	return " at '%s'" % token.lexeme

class Report:
	""" Collects static issues and remembers whether a run-time error happened. """
	_issues : list[Diagnostic]

	def __init__(self, *, verbose:int=0, sink=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._sink = sink
		self._issues = []
		self._source = None
		self.had_runtime_error = False

	def sick(self): return bool(self._issues)

	@property
	def issues(self): return tuple(self._issues)

	def reset(self):
		self._issues.clear()
		self.had_runtime_error = False

	def set_source(self, text:str, path:Optional[Path]=None):
		filename = None if path is None else str(path)
		self._source = SourceText(text, filename=filename)

	def _out(self):
		# Looked up late, so that tests which patch sys.stderr see the output.
		return sys.stderr if self._sink is None else self._sink

	def info(self, *args):
		if self._verbose:
			print(*args, file=self._out())

	def issue(self, it:Diagnostic):
		self._issues.append(it)
		out = self._out()
		print(it.as_text(), file=out)
		if self._verbose and self._source is not None and it.spot is not None:
			print(self._illustrate(it.spot, it.width), file=out)

	def _illustrate(self, spot:int, width:int):
		row, col = self._source.find_row_col(spot)
		single_line = self._source.line_of_text(row)
		return illustration(single_line, col, width, prefix="% 6d |" % row, caption="")

	# Methods the scanner calls:
	def scan_error(self, line:int, message:str, spot:Optional[int]=None):
		self.issue(Diagnostic(line, "", message, spot))

	# Methods the parser and resolver call:
	def error(self, token:Token, message:str):
		width = max(len(token.lexeme), 1)
		self.issue(Diagnostic(token.line, _where(token), message, token.spot, width))

	# Methods the interpreter calls:
	def runtime_error(self, ex:LoxRuntimeError):
		print("%s\n[line %d]" % (ex.message, ex.token.line), file=self._out())
		self.had_runtime_error = True

	def assert_no_issues(self, message=""):
		""" Does what it says on the tin """
		if self._issues:
			raise AssertionError(message, self._issues)
