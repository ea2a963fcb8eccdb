from pathlib import Path
import io
import unittest

from lox.diagnostics import Report, Yuck
from lox.tree_walker import executive
from lox.tree_walker.evaluator import Interpreter

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=0, sink=io.StringIO())
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(folder:Path, filename:str):
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	out = io.StringIO()
	interpreter = Interpreter(report, out=out)
	text = specimen_path.read_text(encoding="utf-8")
	try:
		statements = executive.check_program(text, interpreter, report)
	except Yuck as ex:
		assert report.sick()
		return ex.args[0]
	else:
		report.assert_no_issues()
		interpreter.interpret(statements)
		if report.had_runtime_error: return "runtime"
		else: return "failed to fail"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, folder, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(folder, _identify_problem(zoo_fail / folder, basename + ".lox"))

	def test_00_scan(self):
		self.expect("scan", [
			"unexpected_character",
			"unterminated_string",
		])

	def test_01_parse(self):
		self.expect("parse", [
			"broken_method",
			"invalid_assignment",
			"missing_semicolon",
			"two_errors",
		])

	def test_02_resolve(self):
		self.expect("resolve", [
			"inherit_self",
			"init_returns_value",
			"own_initializer",
			"redeclare",
			"return_top_level",
			"super_outside_class",
			"super_without_superclass",
			"this_outside_class",
		])

	def test_03_runtime(self):
		self.expect("runtime", [
			"add_mismatch",
			"arity",
			"assign_undeclared",
			"negate_string",
			"not_callable",
			"superclass_not_class",
			"undefined_property",
			"undefined_variable",
		])

	def test_zoo_is_fully_listed(self):
		for phase in ("scan", "parse", "resolve", "runtime"):
			with self.subTest(phase):
				for path in (zoo_fail / phase).glob("*.lox"):
					self.assertEqual(phase, _identify_problem(path.parent, path.name))

	def test_arity_failure_happens_before_the_body(self):
		report = Silence()
		out = io.StringIO()
		text = (zoo_fail / "runtime/arity.lox").read_text(encoding="utf-8")
		status = executive.run_program(text, Interpreter(report, out=out), report)
		self.assertEqual(executive.EX_SOFTWARE, status)
		self.assertEqual("", out.getvalue())
		self.assertEqual("Expected 2 arguments but got 1.\n[line 2]\n", report._sink.getvalue())


if __name__ == '__main__':
	unittest.main()
