from pathlib import Path
import io
import re
import unittest
from lox.diagnostics import Report
from lox.tree_walker import executive
from lox.tree_walker.evaluator import Interpreter

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"
zoo_ok = base_folder/"zoo/ok"

EXPECTATION = re.compile(r"// expect: (.*)$", re.MULTILINE)

def _good(folder, which) -> list[str]:
	""" Run a program that should work. Answer the lines it printed. """
	path = folder / (which + ".lox")
	text = path.read_text(encoding="utf-8")
	report = Report(verbose=0, sink=io.StringIO())
	out = io.StringIO()
	status = executive.run_program(text, Interpreter(report, out=out), report, path)
	report.assert_no_issues("Ostensibly-good example failed to pass static checks.")
	assert status == executive.EX_OK, report._sink.getvalue()
	return out.getvalue().splitlines()

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke, and for the output each one promises. """

	def check(self, folder, names):
		for name in names:
			with self.subTest(name):
				expected = EXPECTATION.findall((folder / (name + ".lox")).read_text(encoding="utf-8"))
				self.assertTrue(expected, "Example promises nothing.")
				self.assertEqual(expected, _good(folder, name))

	def test_examples(self):
		self.check(examples, [
			"arithmetic",
			"classes",
			"closures",
			"fibonacci",
			"scoping",
		])

	def test_zoo_of_ok(self):
		self.check(zoo_ok, [
			"for_loop",
			"initializer",
			"logical",
			"methods_as_values",
			"multiline_string",
			"nested_functions",
		])

	def test_nothing_is_forgotten(self):
		for folder, listed in (
			(examples, {"arithmetic", "classes", "closures", "fibonacci", "scoping"}),
			(zoo_ok, {"for_loop", "initializer", "logical", "methods_as_values", "multiline_string", "nested_functions"}),
		):
			self.assertSetEqual(listed, {p.stem for p in folder.glob("*.lox")})


if __name__ == '__main__':
	unittest.main()
