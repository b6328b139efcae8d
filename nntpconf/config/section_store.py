"""Section store for srnd-style ini documents.

Thin adapter over configparser that behaves the way the node's config
files expect:
- option names keep their case (`image/gif`, `overchan.overchan`)
- `=` is the only delimiter, so values may contain `:`
- no interpolation and no implicit DEFAULT section
- sections keep insertion order, glob lookup by name (`feed-*`)
"""

import configparser
import fnmatch
import io
import os
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ..util import ConfigError, read_utf8

# never appears in a real document; disables configparser's DEFAULT merging
_NO_DEFAULT = "\x00default"


class SectionStore:
    """Ordered collection of named sections, each an ordered option map."""

    def __init__(self, log_func: Optional[Callable[[str, int], None]] = None):
        """Initialize an empty store.

        Args:
            log_func: Optional function for logging messages (msg, level)
        """
        self.log = log_func
        self.path = ""
        self._cp = self._mkparser()

    @staticmethod
    def _mkparser() -> configparser.ConfigParser:
        cp = configparser.ConfigParser(
            delimiters=("=",),
            comment_prefixes=("#", ";"),
            inline_comment_prefixes=None,
            strict=False,
            interpolation=None,
            default_section=_NO_DEFAULT,
        )
        cp.optionxform = str  # type: ignore
        return cp

    @classmethod
    def from_file(
        cls, path: str, log_func: Optional[Callable[[str, int], None]] = None
    ) -> "SectionStore":
        store = cls(log_func)
        store.read(path)
        return store

    def read(self, path: str) -> None:
        """Parse an ini document from disk, adding its sections.

        Raises:
            ConfigError: If the file is missing, unreadable or malformed
        """
        if not os.path.isfile(path):
            raise ConfigError("cannot read config file %s" % (path,), path)

        self.read_string(read_utf8(self.log, path, True), path)
        self.path = path

    def read_string(self, text: str, source: str = "<string>") -> None:
        try:
            self._cp.read_string(text, source)
        except configparser.Error as ex:
            msg = "failed to parse %s: %s" % (source, ex)
            if self.log:
                self.log(msg, 1)
            raise ConfigError(msg, source) from ex

    def has_section(self, name: str) -> bool:
        return self._cp.has_section(name)

    def section(self, name: str) -> Optional[Dict[str, str]]:
        """Options of section `name` as a new ordered dict, or None if absent."""
        if not self._cp.has_section(name):
            return None

        return dict(self._cp.items(name))

    def sections(self) -> List[str]:
        return self._cp.sections()

    def find(self, pattern: str) -> List[Tuple[str, Dict[str, str]]]:
        """All sections whose name matches the glob `pattern`, in document order."""
        ret = []
        for name in self._cp.sections():
            if fnmatch.fnmatchcase(name, pattern):
                ret.append((name, dict(self._cp.items(name))))

        return ret

    def new_section(self, name: str) -> "SectionWriter":
        if not self._cp.has_section(name):
            self._cp.add_section(name)

        return SectionWriter(self._cp, name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cp.sections())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._cp.has_section(name)

    def dumps(self) -> str:
        buf = io.StringIO()
        self._cp.write(buf)
        return buf.getvalue()

    def save(self, path: str) -> None:
        """Write the document to `path`, replacing any existing file."""
        tmp = path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(self.dumps())
            os.replace(tmp, path)
        except OSError as ex:
            raise ConfigError("cannot write %s: %s" % (path, ex), path) from ex

        self.path = path


class SectionWriter:
    """Append options to one section of a SectionStore."""

    def __init__(self, cp: configparser.ConfigParser, name: str):
        self._cp = cp
        self.name = name

    def add(self, key: str, value: str) -> "SectionWriter":
        self._cp.set(self.name, key, value)
        return self

    def update(self, opts: Dict[str, str]) -> "SectionWriter":
        for k, v in opts.items():
            self.add(k, v)
        return self
