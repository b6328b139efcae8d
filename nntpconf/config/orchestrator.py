"""Startup orchestrator.

Coordinates default generation, resolution and validation; this is the
only place where a configuration error turns into process termination.
"""

import os
from typing import Callable, List, Mapping, Optional

from ..util import ConfigError
from .defaults import DefaultGenerator
from .model import NodeConfig
from .resolver import ConfigResolver


class StartupOrchestrator:
    """Orchestrates the config part of node startup.

    Coordinates modules:
    - DefaultGenerator (defaults)
    - ConfigResolver (resolver), which runs FeedParser, FilterSet
      and ConfigValidator
    """

    def __init__(
        self,
        log_func: Callable[[str, int], None],
        workdir: str = ".",
        env: Optional[Mapping[str, str]] = None,
    ):
        """Initialize orchestrator.

        Args:
            log_func: Function for logging messages (msg, level)
            workdir: Directory holding srnd.ini/feeds.ini
            env: Environment for the SRND_* path overrides
        """
        self.log = log_func
        self.workdir = workdir
        self.env = os.environ if env is None else env
        self.resolver = ConfigResolver(log_func, workdir, self.env)
        self.defaults = DefaultGenerator(log_func)

    def check_config(self) -> List[str]:
        """Generate srnd.ini / feeds.ini if missing; returns written paths."""
        return self.defaults.ensure(
            self.resolver.default_primary_path(),
            self.resolver.default_feeds_path(),
            self.env,
        )

    def load(self, generate: bool = True) -> NodeConfig:
        """
        Produce the validated config.

        Args:
            generate: Write default documents first when none exist

        Returns:
            Validated NodeConfig

        Raises:
            ConfigError: If the configuration cannot be used
        """
        if generate:
            self.check_config()

        cfg = self.resolver.read()
        self.log(
            "config ok; %d feeds, %d filters" % (len(cfg.feeds), len(cfg.filter)), 6
        )
        return cfg


def run_startup(
    log_func: Callable[[str, int], None],
    workdir: str = ".",
    env: Optional[Mapping[str, str]] = None,
    generate: bool = True,
) -> NodeConfig:
    """Load the config or terminate the process with exit code 1."""
    try:
        return StartupOrchestrator(log_func, workdir, env).load(generate)
    except ConfigError as ex:
        log_func("fatal: %s" % (ex,), 1)
        raise SystemExit(1)
