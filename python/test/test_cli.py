import io
import os
import re
import shutil
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from cooccur.cli import main


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.cwd = os.getcwd()
        self.tmp_dir = tempfile.mkdtemp()
        os.chdir(self.tmp_dir)
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        for key in list(os.environ):
            if key.startswith("COOCCUR_"):
                del os.environ[key]

    def tearDown(self):
        os.chdir(self.cwd)
        shutil.rmtree(self.tmp_dir)

    def _run(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()

    def _write_input(self, lines):
        with open("playlists.txt", "w") as file:
            file.write("\n".join(lines) + "\n")
        return "playlists.txt"

    def test_default_threshold_run(self):
        path = self._write_input(["Radiohead,Portishead,Bjork"] * 50 + ["Radiohead,Bjork"])
        code, stdout, _ = self._run(path)
        self.assertEqual(code, 0)
        lines = stdout.splitlines()
        self.assertEqual(lines[:3], ["Radiohead,Portishead", "Radiohead,Bjork", "Portishead,Bjork"])
        self.assertRegex(lines[3], r"^3 matches found in \d+ milliseconds$")
        with open("output.txt") as file:
            self.assertEqual(file.read(), "Radiohead,Portishead\nRadiohead,Bjork\nPortishead,Bjork\n")

    def test_threshold_flag(self):
        path = self._write_input(["a,b", "a,b", "a,b"])
        code, stdout, _ = self._run(path, "--threshold", "2")
        self.assertEqual(code, 0)
        self.assertEqual(stdout.splitlines()[0], "a,b")
        self.assertTrue(stdout.splitlines()[1].startswith("1 matches found in "))

    def test_threshold_environment(self):
        path = self._write_input(["a,b", "a,b"])
        os.environ["COOCCUR_THRESHOLD"] = "2"
        code, stdout, _ = self._run(path)
        self.assertEqual(code, 0)
        self.assertEqual(stdout.splitlines()[0], "a,b")

    def test_empty_input(self):
        with open("empty.txt", "w"):
            pass
        code, stdout, _ = self._run("empty.txt")
        self.assertEqual(code, 0)
        self.assertTrue(re.match(r"^0 matches found in \d+ milliseconds\n$", stdout))
        with open("output.txt") as file:
            self.assertEqual(file.read(), "")

    def test_summary_not_in_output_file(self):
        path = self._write_input(["a,b", "a,b"])
        self._run(path, "--threshold", "2")
        with open("output.txt") as file:
            self.assertEqual(file.read(), "a,b\n")

    def test_byte_identical_reruns(self):
        path = self._write_input(["a,b,c,d", "d,c,b,a", "b,d", "a,c"])
        self._run(path, "--threshold", "1")
        with open("output.txt") as file:
            first = file.read()
        self._run(path, "--threshold", "1")
        with open("output.txt") as file:
            self.assertEqual(file.read(), first)

    def test_missing_file(self):
        code, stdout, stderr = self._run("nope.txt")
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("nope.txt", stderr)
        self.assertFalse(os.path.exists("output.txt"))

    def test_missing_file_leaves_previous_output(self):
        with open("output.txt", "w") as file:
            file.write("x,y\n")
        self._run("nope.txt")
        with open("output.txt") as file:
            self.assertEqual(file.read(), "x,y\n")

    def test_wrong_argument_count(self):
        for argv in ([], ["a.txt", "b.txt"]):
            with self.assertRaises(SystemExit) as context:
                self._run(*argv)
            self.assertEqual(context.exception.code, 2)
        self.assertFalse(os.path.exists("output.txt"))

    def test_bad_threshold_is_usage_error(self):
        path = self._write_input(["a,b"])
        code, stdout, stderr = self._run(path, "--threshold", "zero")
        self.assertEqual(code, 2)
        self.assertIn("usage:", stderr)
        self.assertFalse(os.path.exists("output.txt"))

    def test_unknown_encoding_is_usage_error(self):
        path = self._write_input(["a,b", "a,b"])
        code, stdout, stderr = self._run(path, "--encoding", "no-such-codec")
        self.assertEqual(code, 2)
        self.assertEqual(stdout, "")
        self.assertIn("encoding", stderr)
        self.assertFalse(os.path.exists("output.txt"))

    def test_trailing_delimiters_add_no_blank_item(self):
        path = self._write_input(["a,b,", "a,b,", "a,b,"])
        code, stdout, _ = self._run(path, "--threshold", "2")
        self.assertEqual(code, 0)
        self.assertEqual(stdout.splitlines()[:-1], ["a,b"])

    def test_unwritable_output(self):
        path = self._write_input(["a,b", "a,b"])
        code, stdout, stderr = self._run(path, "--threshold", "2",
                                         "--output", os.path.join("no_such_dir", "out.txt"))
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("out.txt", stderr)


if __name__ == '__main__':
    unittest.main()
