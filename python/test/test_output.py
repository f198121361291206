import io
import os
import shutil
import tempfile
import unittest

from cooccur.errors import OutputWriteFailure
from cooccur.output import MatchWriter, format_match
from cooccur.pairs import Match


class TestMatchWriter(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.output_path = os.path.join(self.tmp_dir, "output.txt")

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_format(self):
        self.assertEqual(format_match(Match("Daft Punk", "Justice", 51)), "Daft Punk,Justice")

    def test_both_sinks_get_the_same_lines(self):
        stream = io.StringIO()
        lines = MatchWriter(self.output_path, stream=stream).write(
            [Match("a", "b", 3), Match("a", "c", 2)]
        )
        self.assertEqual(lines, ["a,b", "a,c"])
        self.assertEqual(stream.getvalue(), "a,b\na,c\n")
        with open(self.output_path) as file:
            self.assertEqual(file.read(), "a,b\na,c\n")

    def test_overwrites_existing_file(self):
        with open(self.output_path, "w") as file:
            file.write("stale\n")
        MatchWriter(self.output_path, stream=io.StringIO()).write([])
        with open(self.output_path) as file:
            self.assertEqual(file.read(), "")
        self.assertEqual(os.listdir(self.tmp_dir), ["output.txt"])

    @unittest.skipIf(os.name != "posix", "file modes are posix only")
    def test_file_mode_follows_umask(self):
        previous = os.umask(0o027)
        try:
            MatchWriter(self.output_path, stream=io.StringIO()).write([Match("a", "b", 3)])
        finally:
            os.umask(previous)
        self.assertEqual(os.stat(self.output_path).st_mode & 0o777, 0o640)

    def test_failed_write_prints_nothing(self):
        stream = io.StringIO()
        bad_path = os.path.join(self.tmp_dir, "missing_dir", "output.txt")
        with self.assertRaises(OutputWriteFailure) as context:
            MatchWriter(bad_path, stream=stream).write([Match("a", "b", 3)])
        self.assertEqual(stream.getvalue(), "")
        self.assertEqual(context.exception.path, bad_path)

    def test_failed_replace_keeps_previous_file(self):
        # a directory cannot be replaced by a file
        os.mkdir(self.output_path)
        stream = io.StringIO()
        with self.assertRaises(OutputWriteFailure):
            MatchWriter(self.output_path, stream=stream).write([Match("a", "b", 3)])
        self.assertEqual(stream.getvalue(), "")
        self.assertTrue(os.path.isdir(self.output_path))
        self.assertEqual(os.listdir(self.tmp_dir), ["output.txt"])


if __name__ == '__main__':
    unittest.main()
