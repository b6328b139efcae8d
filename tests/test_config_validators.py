"""Unit tests for config validator module."""

import unittest
from unittest.mock import MagicMock

from nntpconf.config.model import NodeConfig
from nntpconf.config.validators import (
    DATABASE_KEYS,
    DAEMON_KEYS,
    STORE_KEYS,
    ConfigValidator,
)
from nntpconf.util import ConfigError


def full_config() -> NodeConfig:
    cfg = NodeConfig()
    cfg.daemon = {k: "" for k in DAEMON_KEYS}
    cfg.store = {k: "" for k in STORE_KEYS}
    cfg.database = {k: "" for k in DATABASE_KEYS}
    return cfg


class TestConfigValidator(unittest.TestCase):
    """Test ConfigValidator class."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.log_func = MagicMock()
        self.validator = ConfigValidator(self.log_func)

    def test_validator_instantiation(self) -> None:
        """Test that validator can be instantiated."""
        self.assertIsNotNone(self.validator)
        self.assertEqual(self.validator.log, self.log_func)

    def test_required_keys(self) -> None:
        self.assertEqual(
            set(DAEMON_KEYS), {"bind", "instance_name", "allow_anon", "allow_anon_attachments"}
        )
        self.assertEqual(
            set(STORE_KEYS), {"store_dir", "incoming_dir", "attachments_dir", "thumbs_dir"}
        )
        self.assertEqual(
            set(DATABASE_KEYS), {"host", "port", "user", "password", "type", "schema"}
        )

    def test_all_present_passes_regardless_of_values(self) -> None:
        """Empty or nonsense values are fine; only presence is checked."""
        cfg = full_config()
        cfg.database["port"] = "not-a-number"
        self.validator.validate(cfg)
        self.assertTrue(self.validator.is_valid(cfg))
        self.log_func.assert_not_called()

    def test_each_missing_key_fails(self) -> None:
        for attr, keys in (
            ("daemon", DAEMON_KEYS),
            ("store", STORE_KEYS),
            ("database", DATABASE_KEYS),
        ):
            for k in keys:
                cfg = full_config()
                del getattr(cfg, attr)[k]
                with self.assertRaises(ConfigError) as ctx:
                    self.validator.validate(cfg)
                self.assertIn(k, str(ctx.exception))
                self.assertFalse(self.validator.is_valid(cfg))

    def test_reports_all_missing(self) -> None:
        cfg = full_config()
        del cfg.daemon["bind"]
        del cfg.database["schema"]

        self.assertEqual(
            self.validator.missing_keys(cfg), [("nntp", "bind"), ("database", "schema")]
        )
        with self.assertRaises(ConfigError):
            self.validator.validate(cfg)
        self.assertEqual(self.log_func.call_count, 2)

    def test_works_with_mock_config(self) -> None:
        cfg = MagicMock()
        cfg.daemon = {}
        cfg.store = {}
        cfg.database = {}
        missing = self.validator.missing_keys(cfg)
        self.assertEqual(len(missing), len(DAEMON_KEYS) + len(STORE_KEYS) + len(DATABASE_KEYS))


if __name__ == "__main__":
    unittest.main()
