"""
This is the overall control for the run-time:
source text goes in, through each phase in turn, and a process status comes out.
No phase runs on the output of one that complained.
"""
import sys
from pathlib import Path
from typing import Optional
from .. import syntax
from ..diagnostics import Report, Yuck
from ..front_end import parse
from ..resolution import resolve_words
from ..scanner import scan
from .evaluator import Interpreter

# Exit statuses, per the BSD sysexits convention.
EX_OK = 0
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

# Each level of Lox call or nesting costs a dozen or so Python frames.
RECURSION_LIMIT = 20000

def deepen_stack():
	if sys.getrecursionlimit() < RECURSION_LIMIT:
		sys.setrecursionlimit(RECURSION_LIMIT)

def check_program(text:str, interpreter:Interpreter, report:Report) -> list[syntax.Stmt]:
	"""
	Scan, parse and resolve. Raises Yuck naming the first phase that found trouble.
	A scan error does not stop the parser from looking for more problems.
	"""
	deepen_stack()
	tokens = scan(text, report)
	scan_trouble = report.sick()
	try: statements = parse(tokens, report)
	except RecursionError:
		report.error(tokens[-1], "Program is nested too deeply.")
		raise Yuck("parse") from None
	if scan_trouble: raise Yuck("scan")
	if report.sick(): raise Yuck("parse")
	try: resolve_words(statements, interpreter, report)
	except RecursionError:
		report.error(tokens[-1], "Program is nested too deeply.")
		raise Yuck("resolve") from None
	if report.sick(): raise Yuck("resolve")
	return statements

def run_program(text:str, interpreter:Interpreter, report:Report, path:Optional[Path]=None) -> int:
	report.set_source(text, path)
	try: statements = check_program(text, interpreter, report)
	except Yuck as ex:
		report.info("Stopped after the", ex.args[0], "phase")
		return EX_DATAERR
	interpreter.interpret(statements)
	return EX_SOFTWARE if report.had_runtime_error else EX_OK
