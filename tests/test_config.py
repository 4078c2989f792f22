import os
import unittest
from unittest import mock

from courseup.config import Settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)
        self.assertEqual(s.terms, ["202109", "202201"])
        self.assertEqual(s.default_limit, 10)
        self.assertEqual(s.provider, "kuali")
        self.assertTrue(s.strict_identifiers)
        self.assertEqual(s.kuali_catalogs, {})

    def test_environment_overrides(self) -> None:
        env = {
            "COURSEUP_TERMS": '["202205"]',
            "COURSEUP_KUALI_CATALOGS": '{"202205": "cat-22"}',
            "COURSEUP_PROVIDER": "snapshot",
            "COURSEUP_STRICT_IDENTIFIERS": "false",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)
        self.assertEqual(s.terms, ["202205"])
        self.assertEqual(s.kuali_catalogs, {"202205": "cat-22"})
        self.assertEqual(s.provider, "snapshot")
        self.assertFalse(s.strict_identifiers)


if __name__ == "__main__":
    unittest.main()
