"""
This is a tree-walking interpreter for the Lox scripting language.

For example:

    lox program.lox

will run program.lox if possible, or else try to explain why not.

    lox

with no program starts an interactive prompt. Each line runs as a program of its own,
but variables, functions and classes stay defined from one line to the next.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="lox",
	description="Tree-walking interpreter for the Lox scripting language.",
	epilog=__doc__,
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", help="try examples/closures.lox for example.")
parser.add_argument('-c', "--check", action="store_true", help="Check the program but do not actually execute it.")
parser.add_argument('-p', "--print-ast", action="store_true", help="Print the syntax tree instead of running the program.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what each phase is doing.")

def run(args) -> int:
	from .diagnostics import Report
	from .tree_walker.evaluator import Interpreter
	from .tree_walker import executive
	report = Report(verbose=args.verbose)
	interpreter = Interpreter(report)
	if args.program is None:
		return run_prompt(interpreter, report)
	path = Path.cwd() / args.program
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as ex:
		print("Something went pear-shaped while trying to read %s: %s" % (path, ex.strerror), file=sys.stderr)
		return executive.EX_NOINPUT
	if args.check or args.print_ast:
		return check(text, path, interpreter, report, args.print_ast)
	return executive.run_program(text, interpreter, report, path)

def check(text:str, path:Path, interpreter, report, print_ast:bool) -> int:
	from .diagnostics import Yuck
	from .printer import AstPrinter
	from .tree_walker import executive
	report.set_source(text, path)
	try: statements = executive.check_program(text, interpreter, report)
	except Yuck: return executive.EX_DATAERR
	if print_ast:
		printer = AstPrinter()
		for stmt in statements: print(printer.render(stmt))
	else:
		print("Looks plausible to me.", file=sys.stderr)
	return executive.EX_OK

def run_prompt(interpreter, report) -> int:
	""" Errors on one line never end the session. End-of-file does. """
	from .tree_walker import executive
	while True:
		try: line = input("> ")
		except EOFError:
			print()
			return executive.EX_OK
		report.reset()
		executive.run_program(line, interpreter, report)

def main():
	sys.exit(run(parser.parse_args()))
