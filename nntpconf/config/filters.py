"""Global content filters.

One regular expression per line; everything from the first `#` on is a
comment. Whitespace is part of the pattern; blank lines are skipped.
The set is loaded once at startup and only read afterwards.
"""

import re
from typing import Callable, List, Optional, Pattern

from ..util import ConfigError, read_utf8


class FilterSet:
    """Ordered list of compiled content filter patterns."""

    def __init__(self, log_func: Optional[Callable[[str, int], None]] = None):
        """Initialize an empty filter set.

        Args:
            log_func: Optional function for logging messages (msg, level)
        """
        self.log = log_func
        self.rules: List[Pattern[str]] = []

    def __len__(self) -> int:
        return len(self.rules)

    def load(self, path: str) -> int:
        """Compile every pattern in `path` and append them to the set.

        Nothing is appended unless the whole file compiles.

        Args:
            path: Filter file, one pattern per line

        Returns:
            Number of rules added

        Raises:
            ConfigError: If the file cannot be read or a pattern is malformed
        """
        txt = read_utf8(self.log, path, True)

        rules = []
        for n, ln in enumerate(txt.splitlines(), 1):
            ln = ln.split("#", 1)[0].rstrip("\r")
            if not ln.strip():
                continue

            try:
                rules.append(re.compile(ln))
            except re.error as ex:
                msg = "bad filter in %s line %d: %r: %s" % (path, n, ln, ex)
                if self.log:
                    self.log(msg, 1)
                raise ConfigError(msg, path) from ex

        self.rules.extend(rules)
        return len(rules)

    def matches(self, text: str) -> bool:
        """True if any rule is found anywhere in `text`"""
        for ptn in self.rules:
            if ptn.search(text):
                return True

        return False

    def first_match(self, text: str) -> Optional[str]:
        for ptn in self.rules:
            if ptn.search(text):
                return ptn.pattern

        return None
