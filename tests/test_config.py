import logging
import tempfile
import unittest
from pathlib import Path

from algotoken.algorand.client.model import DEFAULT_WAIT_ROUNDS
from algotoken.config import Config, AlgodConfig
from tests.test_support import AlgoTokenTestCase

CONFIG_TOML = """
[algod]
url = "http://localhost:4001"
token = "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"

[asa]
wait_rounds = 10
flat_fee = true

[logging]
level = "info"
"""


class ConfigTestCase(AlgoTokenTestCase):
    def test_from_config_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            config_file = Path(tmp_dir) / "algotoken.toml"
            config_file.write_text(CONFIG_TOML)
            config = Config.from_config_file(config_file)

        self.assertEqual(
            config.algod,
            AlgodConfig(url="http://localhost:4001", token="a" * 64),
        )
        self.assertEqual(config.wait_rounds, 10)
        self.assertTrue(config.flat_fee)
        self.assertEqual(config.log_level, logging.INFO)

    def test_defaults(self):
        config = Config.from_dict({"algod": {"url": "http://localhost:4001"}})
        self.assertEqual(config.algod.token, "")
        self.assertEqual(config.wait_rounds, DEFAULT_WAIT_ROUNDS)
        self.assertFalse(config.flat_fee)
        self.assertEqual(config.log_level, logging.WARNING)

    def test_invalid_config(self):
        for invalid_config in (
            {},
            {"algod": {"token": "a"}},
            {"algod": {"url": ""}},
            {"algod": {"url": "http://localhost:4001"}, "asa": {"wait_rounds": 0}},
            {"algod": {"url": "http://localhost:4001"}, "logging": {"level": "LOUD"}},
        ):
            with self.subTest(config=invalid_config):
                with self.assertRaises(ValueError):
                    Config.from_dict(invalid_config)


if __name__ == "__main__":
    unittest.main()
