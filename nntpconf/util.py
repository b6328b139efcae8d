# coding: utf-8
from __future__ import print_function, unicode_literals

import os
import sys
import threading
import time
from typing import Any, Mapping, Optional, Union

from .__init__ import TYPE_CHECKING, VT100

if TYPE_CHECKING:
    from typing import Protocol

    class RootLogger(Protocol):
        def __call__(self, src: str, msg: str, c: Union[int, str] = 0) -> None:
            return None

    class NamedLogger(Protocol):
        def __call__(self, msg: str, c: Union[int, str] = 0) -> None:
            return None


class ConfigError(Exception):
    """Unrecoverable configuration problem; the node must not start."""

    def __init__(self, msg: str, src: Optional[str] = None) -> None:
        super(ConfigError, self).__init__(msg)
        self.src = src

    def __repr__(self) -> str:
        return "ConfigError({}, {})".format(repr(self.args), repr(self.src))


class NotUTF8(ConfigError):
    pass


class PrintLogger(object):
    """Root logger; writes `hh:mm:ss src msg` lines to a stream.

    `c` is an ANSI colour number (1 red, 3 yellow, 6 cyan) or a raw
    escape sequence; colours are dropped when the stream is not a tty.
    """

    def __init__(self, stream: Any = None, color: Optional[bool] = None) -> None:
        self.stream = stream or sys.stderr
        if color is None:
            color = VT100 and hasattr(self.stream, "isatty") and self.stream.isatty()

        self.color = color
        self.mutex = threading.Lock()

    def __call__(self, src: str, msg: str, c: Union[int, str] = 0) -> None:
        ts = time.strftime("%H:%M:%S")
        if not self.color or not c:
            ln = "%s %-21s %s" % (ts, src, msg)
        elif isinstance(c, int):
            ln = "%s %-21s \033[3%dm%s\033[0m" % (ts, src, c, msg)
        else:
            ln = "%s %-21s %s%s\033[0m" % (ts, src, c, msg)

        with self.mutex:
            self.stream.write(ln + "\n")
            self.stream.flush()


def named(root: "RootLogger", src: str) -> "NamedLogger":
    """bind a source name to a root logger"""

    def log(msg: str, c: Union[int, str] = 0) -> None:
        root(src, msg, c)

    return log


def read_utf8(log: Optional["NamedLogger"], ap: str, strict: bool) -> str:
    try:
        with open(ap, "rb") as f:
            buf = f.read()
    except OSError as ex:
        raise ConfigError("cannot read [%s]: %s" % (ap, ex), ap) from ex

    if buf.startswith(b"\xef\xbb\xbf"):
        buf = buf[3:]

    try:
        return buf.decode("utf-8", "strict")
    except UnicodeDecodeError as ex:
        eo = ex.start
        eb = buf[eo : eo + 1]

    if not strict:
        t = "WARNING: The file [%s] is not using the UTF-8 character encoding; some characters in the file will be skipped/ignored. The first unreadable character was byte %r at offset %d."
        t = t % (ap, eb, eo)
        if log:
            log(t, 3)
        return buf.decode("utf-8", "replace")

    t = "ERROR: The file [%s] is not using the UTF-8 character encoding, and cannot be loaded. The first unreadable character was byte %r at offset %d."
    t = t % (ap, eb, eo)
    if log:
        log(t, 1)
    raise NotUTF8(t, ap)


def check_file(fp: Optional[str]) -> bool:
    return bool(fp) and os.path.isfile(fp)  # type: ignore


def env_path(env: Mapping[str, str], key: str, want_dir: bool = False) -> str:
    """value of env[key] if it names an existing file (or dir), else empty"""
    fp = env.get(key) or ""
    if not fp:
        return ""

    if want_dir:
        return fp if os.path.isdir(fp) else ""

    return fp if check_file(fp) else ""


def map_get_int(opts: Mapping[str, str], key: str, fallback: int) -> int:
    try:
        return int(opts[key].strip())
    except (KeyError, ValueError, AttributeError):
        return fallback


def is_one(v: Optional[str]) -> bool:
    return v == "1"


def resolve_in(workdir: str, fp: str) -> str:
    if not fp or os.path.isabs(fp):
        return fp

    return os.path.join(workdir, fp)

