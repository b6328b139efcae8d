# coding: utf-8
"""In-memory configuration model.

NodeConfig is the aggregate handed to the rest of the node; it is built
once by ConfigResolver and replaced wholesale on reload.
"""
from __future__ import print_function, unicode_literals

import fnmatch
import re
from typing import Dict, Iterable, List, Optional, Tuple

from .filters import FilterSet
from .policy import FeedPolicy

SYNC_INTERVAL_MIN = 60

RE_TPL = re.compile(r"\{\{\s*\.([A-Za-z0-9_]+)\s*\}\}")


class FeedConfig(object):
    """One peer; connection settings plus its own propagation policy."""

    def __init__(
        self,
        name: str = "",
        addr: str = "",
        policy: Optional[FeedPolicy] = None,
    ) -> None:
        self.name = name
        self.addr = addr
        self.policy = policy.copy() if policy else FeedPolicy()
        self.proxy_type = ""
        self.proxy_addr = ""
        self.tls_off = False
        self.username = ""
        self.password = ""
        self.sync = False
        self.sync_interval = 0  # seconds
        self.connections = 1
        self.disable = False

    def set_sync(self, on: bool, interval: int = SYNC_INTERVAL_MIN) -> None:
        self.sync = on
        self.sync_interval = max(interval, SYNC_INTERVAL_MIN) if on else 0

    @property
    def has_proxy(self) -> bool:
        return bool(self.proxy_type)

    @property
    def has_auth(self) -> bool:
        return bool(self.username)

    def __repr__(self) -> str:
        return "FeedConfig(%r, %r, sync=%s, conns=%d%s)" % (
            self.name,
            self.addr,
            self.sync,
            self.connections,
            ", disabled" if self.disable else "",
        )


class CryptoConfig(object):
    def __init__(
        self, hostname: str, privkey_file: str, cert_file: str, cert_dir: str
    ) -> None:
        self.hostname = hostname
        self.privkey_file = privkey_file
        self.cert_file = cert_file
        self.cert_dir = cert_dir


class SpamConfig(object):
    def __init__(self, enabled: bool = False, addr: str = "") -> None:
        self.enabled = enabled
        self.addr = addr


class ProfilingConfig(object):
    def __init__(self, enable: bool = False, bind: str = "") -> None:
        self.enable = enable
        self.bind = bind


class HookConfig(object):
    def __init__(self, name: str, exec_path: str, enable: bool) -> None:
        self.name = name
        self.exec = exec_path
        self.enable = enable

    def __repr__(self) -> str:
        return "HookConfig(%r, %r, %s)" % (self.name, self.exec, self.enable)


class ThumbnailRule(object):
    """Command template for one mime pattern (`image/*`, `video/mp4`, `*`)."""

    def __init__(self, mime: str, command: str) -> None:
        self.mime = mime
        self.command = command

    def accepts(self, mime: str) -> bool:
        return fnmatch.fnmatchcase(mime, self.mime)

    def render(self, **kw: str) -> str:
        """fill `{{.name}}` placeholders; unknown names are left alone"""

        def sub(m: "re.Match[str]") -> str:
            return kw.get(m.group(1), m.group(0))

        return RE_TPL.sub(sub, self.command)


class ThumbnailConfig(object):
    def __init__(self, placeholder: str = "") -> None:
        self.rules: List[ThumbnailRule] = []
        self.placeholder = placeholder

    def load(self, opts: Dict[str, str]) -> None:
        for mime, cmd in opts.items():
            self.rules.append(ThumbnailRule(mime, cmd))

    def find_rule(self, mime: str) -> Optional[ThumbnailRule]:
        """exact mime, then `type/*`, then `*`"""
        mime = mime.lower()
        exact = wild = anything = None
        for rule in self.rules:
            pat = rule.mime.lower()
            if pat == mime:
                exact = rule
            elif pat == "*":
                anything = rule
            elif pat.endswith("/*") and rule.accepts(mime):
                wild = rule

        return exact or wild or anything


class NodeConfig(object):
    """Resolved, validated configuration of one node."""

    def __init__(self) -> None:
        self.daemon: Dict[str, str] = {}
        self.crypto: Optional[CryptoConfig] = None
        self.store: Dict[str, str] = {}
        self.database: Dict[str, str] = {}
        self.cache: Dict[str, str] = {}
        self.frontend: Dict[str, str] = {}
        self.pprof: Optional[ProfilingConfig] = None
        self.hooks: List[HookConfig] = []
        self.spamconf = SpamConfig()
        self.thumbnails: Optional[ThumbnailConfig] = None
        self.filter = FilterSet()
        self.inbound_policy: Optional[FeedPolicy] = None
        self.feeds: List[FeedConfig] = []

    @property
    def frontend_enabled(self) -> bool:
        return self.frontend.get("enable") == "1"

    def find_feed(self, name: str) -> Optional[FeedConfig]:
        # feeds accumulate without dedup; the last one loaded wins here
        for feed in reversed(self.feeds):
            if feed.name == name:
                return feed
        return None

    def enabled_hooks(self) -> List[HookConfig]:
        return [x for x in self.hooks if x.enable]

    def effective_policy(self, feed: FeedConfig) -> FeedPolicy:
        return feed.policy.merged_over(self.inbound_policy)

    def decision_table(
        self, newsgroups: Iterable[str]
    ) -> Dict[str, Dict[str, bool]]:
        """feed name -> newsgroup -> allowed, for every enabled feed"""
        groups = list(newsgroups)
        ret: Dict[str, Dict[str, bool]] = {}
        for feed in self.feeds:
            if feed.disable or not feed.name:
                continue
            ret[feed.name] = self.effective_policy(feed).decide(groups)
        return ret

    def allows_inbound(self, newsgroup: str) -> bool:
        if self.inbound_policy is None:
            return False
        return self.inbound_policy.allows(newsgroup)

    def summary(self) -> List[Tuple[str, str]]:
        ret = [
            ("instance", self.daemon.get("instance_name", "")),
            ("bind", self.daemon.get("bind", "")),
            ("database", self.database.get("type", "")),
            ("cache", self.cache.get("type", "")),
            ("frontend", "enabled" if self.frontend_enabled else "disabled"),
            ("tls", self.crypto.hostname if self.crypto else "off"),
            ("spamd", self.spamconf.addr if self.spamconf.enabled else "off"),
            ("filters", str(len(self.filter))),
            ("feeds", str(len(self.feeds))),
        ]
        return ret
