from pathlib import Path
import io
import tempfile
import unittest
from unittest import mock

from lox import cmdline
from lox.tree_walker import executive

base_folder = Path(__file__).parent.parent

def _invoke(*argv):
	""" Run the command line as given. Answer the status and whatever went to stdout and stderr. """
	with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			status = cmdline.run(cmdline.parser.parse_args(list(argv)))
	return status, out.getvalue(), err.getvalue()

class CommandLineTests(unittest.TestCase):

	def setUp(self):
		self._tmp = tempfile.TemporaryDirectory()
		self.folder = Path(self._tmp.name)

	def tearDown(self):
		self._tmp.cleanup()

	def program(self, text:str) -> str:
		path = self.folder / "program.lox"
		path.write_text(text, encoding="utf-8")
		return str(path)

	def test_happy_path(self):
		status, out, err = _invoke(self.program('print "hello";'))
		self.assertEqual(executive.EX_OK, status)
		self.assertEqual("hello\n", out)
		self.assertEqual("", err)

	def test_static_error(self):
		status, out, err = _invoke(self.program("print 1"))
		self.assertEqual(executive.EX_DATAERR, status)
		self.assertEqual("", out)
		self.assertEqual("[line 1] Error at end: Expect ';' after value.\n", err)

	def test_runtime_error(self):
		status, out, err = _invoke(self.program('print "a";\nprint -"b";'))
		self.assertEqual(executive.EX_SOFTWARE, status)
		self.assertEqual("a\n", out)
		self.assertEqual("Operand must be a number.\n[line 2]\n", err)

	def test_missing_file(self):
		status, out, err = _invoke(str(self.folder / "no-such-file.lox"))
		self.assertEqual(executive.EX_NOINPUT, status)
		self.assertIn("no-such-file.lox", err)

	def test_check_does_not_run(self):
		status, out, err = _invoke("--check", self.program('print "hello";'))
		self.assertEqual(executive.EX_OK, status)
		self.assertEqual("", out)
		self.assertEqual("Looks plausible to me.\n", err)
		status, _, _ = _invoke("-c", self.program("return;"))
		self.assertEqual(executive.EX_DATAERR, status)

	def test_print_ast(self):
		status, out, err = _invoke("-p", self.program("var a = 1 + 2;\nprint a;"))
		self.assertEqual(executive.EX_OK, status)
		self.assertEqual("(var a (+ 1 2))\n(print a)\n", out)

	def test_examples_run_from_the_command_line(self):
		status, out, err = _invoke(str(base_folder / "examples/fibonacci.lox"))
		self.assertEqual(executive.EX_OK, status, err)
		self.assertEqual("34", out.splitlines()[-1])

	def test_prompt_keeps_going_and_remembers(self):
		lines = ["var a = 1;", "print a +;", "print nope;", "fun f() { return a + 1; }", "print f();", EOFError]
		with mock.patch("builtins.input", side_effect=lines) as fake_input:
			status, out, err = _invoke()
		self.assertEqual(executive.EX_OK, status)
		self.assertEqual("2\n\n", out)
		self.assertEqual(
			"[line 1] Error at ';': Expect expression.\n"
			"Undefined variable 'nope'.\n[line 1]\n",
			err,
		)
		fake_input.assert_called_with("> ")

	def test_prompt_survives_runaway_recursion(self):
		lines = ["fun f() { f(); }", "f();", "print 1;", EOFError]
		with mock.patch("builtins.input", side_effect=lines):
			status, out, err = _invoke()
		self.assertEqual(executive.EX_OK, status)
		self.assertEqual("1\n\n", out)
		self.assertEqual("Stack overflow.\n[line 1]\n", err)

	def test_verbose_says_more(self):
		status, out, err = _invoke("-v", self.program("print 1"))
		self.assertEqual(executive.EX_DATAERR, status)
		self.assertIn("Stopped after the parse phase", err)


if __name__ == '__main__':
	unittest.main()
