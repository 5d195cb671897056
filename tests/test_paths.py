import unittest

from s3_fs.paths import ROOT, InvalidPathError, leaf_name, valid_path


class ValidPathTests(unittest.TestCase):
    def test_accepts_root_and_plain_keys(self):
        for name in (ROOT, "hello", "testdata/hello", "a/b/c.txt", "A/.hidden", "x..y"):
            with self.subTest(name=name):
                self.assertTrue(valid_path(name))

    def test_rejects_malformed_paths(self):
        for name in ("", "/", "/hello", "hello/", "a//b", "./a", "a/.", "..", "a/../b", "a/./b", "a\udcff"):
            with self.subTest(name=name):
                self.assertFalse(valid_path(name))

    def test_rejects_non_strings(self):
        self.assertFalse(valid_path(None))
        self.assertFalse(valid_path(b"hello"))


class LeafNameTests(unittest.TestCase):
    def test_strips_key_prefix(self):
        self.assertEqual("a", leaf_name("a"))
        self.assertEqual("c", leaf_name("b/c"))
        self.assertEqual("hello", leaf_name("deep/nested/testdata/hello"))

    def test_folder_markers_keep_a_name(self):
        self.assertEqual("b", leaf_name("a/b/"))
        self.assertEqual("/", leaf_name("/"))


class InvalidPathErrorTests(unittest.TestCase):
    def test_is_a_value_error_with_context(self):
        error = InvalidPathError("open", "../etc")

        self.assertIsInstance(error, ValueError)
        self.assertEqual("open", error.op)
        self.assertEqual("../etc", error.path)
        self.assertIn("invalid path", str(error))


if __name__ == "__main__":
    unittest.main()
