# coding: utf-8
"""Host/port helpers for feed and proxy addresses."""
from __future__ import print_function, unicode_literals

from typing import Tuple


def split_host_port(addr: str) -> Tuple[str, str]:
    """Split `host:port` / `[v6]:port` into its parts.

    Anything that is not a well-formed address yields ("", "")
    so that callers can write empty host/port keys back out.
    """
    if not addr:
        return "", ""

    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or addr[end + 1 : end + 2] != ":":
            return "", ""
        return addr[1:end], addr[end + 2 :]

    if addr.count(":") != 1:
        return "", ""

    host, port = addr.split(":", 1)
    return host, port


def join_host_port(host: str, port: str) -> str:
    if ":" in host and not host.startswith("["):
        return "[%s]:%s" % (host, port)

    return "%s:%s" % (host, port)
