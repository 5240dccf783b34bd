import contextlib
import io
import os
import tempfile
import unittest

from ccalc.lang.environment import Environment
from ccalc.lang.error import ErrorHandler, GenericException
from ccalc.lang.session import Session
from ccalc.lang.shell import Shell
from ccalc.main import main
from ccalc.numerical import Complex

SCRIPT = """\
a = 1 + i   # comment
# only a comment

a * 2
b
a
"""


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        handle, self.path = tempfile.mkstemp(suffix=".cc")
        with os.fdopen(handle, "w") as file:
            file.write(SCRIPT)

    def tearDown(self):
        os.remove(self.path)

    def test_preprocess_line(self):
        cases = {"  1 + 2  \n": "1 + 2", "x = 1 # set x": "x = 1", "# nothing": "", "": ""}
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case), case)

    def test_file(self):
        error_handler = ErrorHandler()
        sess = Session(error_handler, self.path, cmd_line=False)
        self.assertEqual([1, 4, 5, 6], list(sess.to_exec))

        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            sess.run(echo=True)

        self.assertEqual([Complex(1, 1), Complex(2, 2), Complex(1, 1)], sess.results)
        self.assertEqual(1, error_handler.errors)
        self.assertEqual({}, sess.to_exec)

        printed = out.getvalue()
        self.assertIn("1 + 1i\n", printed)
        self.assertIn("2 + 2i\n", printed)
        self.assertIn("semantic error", printed)
        self.assertIn(f"{self.path}:5: ", printed)
        self.assertLess(printed.index("2 + 2i"), printed.index("semantic error"))

    def test_strict_file(self):
        sess = Session(ErrorHandler(fatal=True), self.path, cmd_line=False)
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertRaises(SystemExit, sess.run)
        self.assertEqual([Complex(1, 1), Complex(2, 2)], sess.results)

    def test_deeply_nested_line(self):
        with open(self.path, "w") as file:
            file.write("1\n" + "(" * 400 + "1" + ")" * 400 + "\n3\n")

        error_handler = ErrorHandler()
        sess = Session(error_handler, self.path, cmd_line=False)
        with contextlib.redirect_stdout(io.StringIO()):
            sess.run(echo=True)

        self.assertEqual([Complex(1, 0), Complex(1, 0), Complex(3, 0)], sess.results)
        self.assertEqual(0, error_handler.errors)

    def test_bad_paths(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), self.path + ".missing", cmd_line=False)
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_evaluate(self):
        sess = Session(ErrorHandler())
        self.assertEqual("3i", str(sess.evaluate("x = 3i").value))
        self.assertEqual("-9", str(sess.evaluate("x * x").value))
        self.assertFalse(sess.evaluate("y").ok)

    def test_shared_environment(self):
        env = Environment()
        first, second = Session(ErrorHandler(), env=env), Session(ErrorHandler(), env=env)
        first.evaluate("x = 2")
        self.assertEqual(Complex(2, 0), second.evaluate("x").value)
        self.assertFalse(Session(ErrorHandler()).evaluate("x").ok)

    def test_pop(self):
        sess = Session(ErrorHandler())
        sess.add("1", 1)
        sess.add("2", 2)
        sess.run()
        self.assertEqual(Complex(2, 0), sess.pop())
        self.assertEqual([Complex(1, 0)], sess.results)


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler()))

    def onecmd(self, line):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            stop = self.shell.onecmd(line)
        return stop, out.getvalue()

    def test_lines(self):
        self.assertEqual((None, "3i\n"), self.onecmd("x = 3i"))
        self.assertEqual((None, "-9\n"), self.onecmd("x * x"))
        self.assertEqual((None, "2 + 2i\n"), self.onecmd("2 * (1 + i)"))

    def test_errors(self):
        cases = {"y": "semantic error", "1 +": "syntax error", "1 $ 2": "lexical error"}
        for case, label in cases.items():
            stop, printed = self.onecmd(case)
            self.assertFalse(stop, case)
            self.assertIn(label, printed, case)
        self.assertEqual(3, self.shell.sess.error_handler.errors)
        self.assertEqual((None, "1\n"), self.onecmd("1"))

    def test_commands(self):
        self.assertTrue(self.onecmd("exit")[0])
        self.assertTrue(self.onecmd("EOF")[0])
        self.assertIn("abs(z)", self.onecmd("help")[1])
        stop, printed = self.onecmd("")
        self.assertFalse(stop)
        self.assertEqual("", printed)

    def test_vars(self):
        self.assertEqual((None, ""), self.onecmd("vars"))
        self.onecmd("z = 3 + 4i")
        self.onecmd("a = -1")
        self.assertEqual((None, "a = -1\nz = 3 + 4i\n"), self.onecmd("vars"))
        self.assertEqual((None, "2\n"), self.onecmd("vars = 2"))
        self.assertIn("vars = 2\n", self.onecmd("vars")[1])

    def test_command_words_as_names(self):
        self.assertEqual((None, "3\n"), self.onecmd("exit = 3"))
        self.assertEqual((None, "4\n"), self.onecmd("help = exit + 1"))
        self.assertEqual((None, "7\n"), self.onecmd("help + exit"))


class MainTestCase(unittest.TestCase):

    def run_main(self, *argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            status = main(list(argv))
        return status, out.getvalue()

    def test_eval(self):
        self.assertEqual((0, "3i\n-9\n"), self.run_main("-e", "x = 3i", "-e", "x * x"))
        self.assertEqual((0, "5\n"), self.run_main("--eval", "abs(3 + 4i)"))

    def test_eval_error(self):
        status, printed = self.run_main("-e", "y", "-e", "1 / 0")
        self.assertEqual(1, status)
        self.assertIn("semantic error", printed)
        self.assertIn("NaN", printed)

    def test_strict(self):
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertRaises(SystemExit, main, ["--strict", "-e", "y", "-e", "1"])

    def test_file(self):
        handle, path = tempfile.mkstemp(suffix=".cc")
        with os.fdopen(handle, "w") as file:
            file.write("z = 3 + 4i\n")
        try:
            self.assertEqual((0, "3 + 4i\n5\n"), self.run_main(path, "-e", "abs(z)"))
        finally:
            os.remove(path)

    def test_file_with_failing_eval(self):
        handle, path = tempfile.mkstemp(suffix=".cc")
        with os.fdopen(handle, "w") as file:
            file.write("z = 1\n")
        try:
            status, printed = self.run_main(path, "-e", "z + 1", "-e", "q")
        finally:
            os.remove(path)
        self.assertEqual(1, status)
        self.assertTrue(printed.startswith("1\n2\n"), printed)
        self.assertIn("semantic error", printed)
        self.assertNotIn(f"{path}:", printed)

    def test_missing_file(self):
        status, printed = self.run_main("/nonexistent/script.cc")
        self.assertEqual(1, status)
        self.assertIn("could not be opened", printed)


if __name__ == '__main__':
    unittest.main()
