"""Unit tests for the startup orchestrator."""

import os
import tempfile
import unittest
from unittest.mock import MagicMock

from nntpconf.config.orchestrator import StartupOrchestrator, run_startup
from nntpconf.util import ConfigError
from tests import util as tu


class TestStartupOrchestrator(unittest.TestCase):
    """Test StartupOrchestrator class."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.log_func = MagicMock()
        self.tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self.tmp.name
        self.orchestrator = StartupOrchestrator(self.log_func, self.tmpdir, {})
        self.orchestrator.defaults.hostname_func = lambda: "node.example"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_orchestrator_instantiation(self) -> None:
        """Test that orchestrator can be instantiated."""
        self.assertIsNotNone(self.orchestrator)
        self.assertEqual(self.orchestrator.log, self.log_func)

    def test_first_start_generates_and_loads(self) -> None:
        cfg = self.orchestrator.load()

        self.assertTrue(os.path.isfile(os.path.join(self.tmpdir, "srnd.ini")))
        self.assertTrue(os.path.isfile(os.path.join(self.tmpdir, "feeds.ini")))
        self.assertEqual(cfg.crypto.hostname, "node.example")
        self.assertEqual(cfg.cache, {"type": "null"})
        self.assertTrue(cfg.frontend_enabled)
        self.assertEqual(len(cfg.hooks), 1)
        self.assertEqual([x.name for x in cfg.feeds], ["2hu"])
        self.assertEqual(cfg.decision_table(["ctl"]), {})  # 2hu is disabled

    def test_second_start_keeps_secrets(self) -> None:
        first = self.orchestrator.load()
        second = self.orchestrator.load()
        self.assertEqual(first.daemon["secretkey"], second.daemon["secretkey"])
        self.assertEqual(first.frontend["api-secret"], second.frontend["api-secret"])

    def test_load_without_generate(self) -> None:
        with self.assertRaises(ConfigError):
            self.orchestrator.load(generate=False)
        self.assertFalse(os.path.exists(os.path.join(self.tmpdir, "srnd.ini")))

    def test_existing_config_used(self) -> None:
        tu.write(self.tmpdir, "srnd.ini", tu.PRIMARY_INI)
        tu.write(self.tmpdir, "feeds.ini", tu.FEEDS_INI)

        self.assertEqual(self.orchestrator.check_config(), [])
        cfg = self.orchestrator.load()
        self.assertEqual(cfg.feeds[0].addr, "2hu-ch.org:119")

    def test_run_startup_exits_on_error(self) -> None:
        tu.write(self.tmpdir, "srnd.ini", "[nntp]\nbind = :1199\n")
        tu.write(self.tmpdir, "feeds.ini", tu.FEEDS_INI)

        with self.assertRaises(SystemExit) as ctx:
            run_startup(self.log_func, self.tmpdir, {})
        self.assertEqual(ctx.exception.code, 1)

        fatal = [c for c in self.log_func.call_args_list if c.args[0].startswith("fatal")]
        self.assertEqual(len(fatal), 1)
        self.assertEqual(fatal[0].args[1], 1)

    def test_run_startup_ok(self) -> None:
        tu.write(self.tmpdir, "srnd.ini", tu.PRIMARY_INI)
        tu.write(self.tmpdir, "feeds.ini", tu.FEEDS_INI)
        cfg = run_startup(self.log_func, self.tmpdir, {})
        self.assertEqual(len(cfg.feeds), 1)


if __name__ == "__main__":
    unittest.main()
