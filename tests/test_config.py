import os
import unittest
from unittest.mock import patch

from forganizer.config import Options, load_env_defaults


class TestOptions(unittest.TestCase):
    def test_defaults(self):
        options = Options()
        self.assertFalse(options.recursive)
        self.assertFalse(options.dry_run)
        self.assertEqual(options.days_older, 0)
        self.assertFalse(options.use_exif)
        self.assertEqual(options.hash_algorithm, "md5")

    def test_negative_days_rejected(self):
        with self.assertRaises(ValueError):
            Options(days_older=-1)

    def test_unknown_hash_rejected(self):
        with self.assertRaises(ValueError):
            Options(hash_algorithm="not-a-hash")

    def test_variable_length_hash_rejected(self):
        for name in ("shake_128", "shake_256"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Options(hash_algorithm=name)

    def test_hash_that_cannot_be_built_rejected(self):
        with patch("forganizer.config.hashlib.new", side_effect=ValueError("unsupported hash type")):
            with self.assertRaises(ValueError):
                Options(hash_algorithm="sha256")

    def test_common_hashes_accepted(self):
        for name in ("md5", "sha1", "sha256"):
            with self.subTest(name=name):
                self.assertEqual(Options(hash_algorithm=name).hash_algorithm, name)

    def test_options_are_read_only(self):
        options = Options()
        with self.assertRaises(AttributeError):
            options.dry_run = True


@patch("forganizer.config.load_dotenv")
class TestEnvDefaults(unittest.TestCase):
    def test_empty_environment(self, _load_dotenv):
        with patch.dict(os.environ, {}, clear=True):
            defaults = load_env_defaults()

        self.assertEqual(
            defaults,
            {"recursive": False, "use_exif": False, "days_older": 0, "hash_algorithm": "md5"},
        )

    def test_values_from_environment(self, _load_dotenv):
        env = {
            "FORGANIZER_RECURSIVE": "yes",
            "FORGANIZER_EXIF": "1",
            "FORGANIZER_DAYS": "30",
            "FORGANIZER_HASH": "sha256",
        }
        with patch.dict(os.environ, env, clear=True):
            defaults = load_env_defaults()

        self.assertTrue(defaults["recursive"])
        self.assertTrue(defaults["use_exif"])
        self.assertEqual(defaults["days_older"], 30)
        self.assertEqual(defaults["hash_algorithm"], "sha256")

    def test_bad_integer_falls_back(self, _load_dotenv):
        with patch.dict(os.environ, {"FORGANIZER_DAYS": "thirty"}, clear=True):
            self.assertEqual(load_env_defaults()["days_older"], 0)


if __name__ == "__main__":
    unittest.main()
