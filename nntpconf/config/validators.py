"""Configuration validators.

Checks that the load-bearing keys are present in:
- [nntp] (daemon)
- [articles] (storage)
- [database]

Only presence is checked; values are not interpreted here.
"""

from typing import Callable, Dict, List, Sequence, Tuple

from ..util import ConfigError

DAEMON_KEYS = ("bind", "instance_name", "allow_anon", "allow_anon_attachments")
STORE_KEYS = tuple(x + "_dir" for x in ("store", "incoming", "attachments", "thumbs"))
DATABASE_KEYS = ("host", "port", "user", "password", "type", "schema")


class ConfigValidator:
    """Validate a resolved NodeConfig."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize validator with logging function.

        Args:
            log_func: Function for logging messages (msg, level)
        """
        self.log = log_func

    def missing_keys(self, cfg) -> List[Tuple[str, str]]:
        """
        List every required key absent from the config.

        Args:
            cfg: NodeConfig (or anything with daemon/store/database dicts)

        Returns:
            List of (section, key) tuples, empty when valid
        """
        ret = []
        checks: Sequence[Tuple[str, Dict[str, str], Sequence[str]]] = (
            ("nntp", cfg.daemon, DAEMON_KEYS),
            ("articles", cfg.store, STORE_KEYS),
            ("database", cfg.database, DATABASE_KEYS),
        )
        for sect, opts, keys in checks:
            for k in keys:
                if k not in opts:
                    ret.append((sect, k))

        return ret

    def validate(self, cfg) -> None:
        """Raise unless every required key is present.

        Raises:
            ConfigError: Naming all missing keys
        """
        missing = self.missing_keys(cfg)
        if not missing:
            return

        for sect, k in missing:
            self.log("in section [%s], no parameter '%s' provided" % (sect, k), 1)

        zs = ", ".join("[%s] %s" % (s, k) for s, k in missing)
        raise ConfigError("invalid config; missing required parameters: " + zs)

    def is_valid(self, cfg) -> bool:
        return not self.missing_keys(cfg)
