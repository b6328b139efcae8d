"""Feed definition parsing and writing.

A feed-definition document holds:
- [global]: inbound policy, newsgroup pattern -> "1"/"0"
- [feed-NAME]: connection settings for peer NAME
- [NAME]: propagation policy for peer NAME (required for every feed-NAME)
"""

from typing import Callable, List, Optional, Sequence, Tuple

from ..net_util import join_host_port, split_host_port
from ..util import ConfigError, is_one, map_get_int
from .model import SYNC_INTERVAL_MIN, FeedConfig
from .policy import FeedPolicy
from .section_store import SectionStore

FEED_PREFIX = "feed-"
GLOBAL_SECTION = "global"


class FeedParser:
    """Turn feed-definition documents into FeedConfig lists."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize parser with logging function.

        Args:
            log_func: Function for logging messages (msg, level)
        """
        self.log = log_func

    def parse(self, path: str) -> Tuple[List[FeedConfig], Optional[FeedPolicy]]:
        """Read and parse one feed-definition file.

        Raises:
            ConfigError: If the file is unreadable or a feed has no policy section
        """
        store = SectionStore.from_file(path, self.log)
        return self.parse_store(store, path)

    def parse_store(
        self, store: SectionStore, source: str = "<feeds>"
    ) -> Tuple[List[FeedConfig], Optional[FeedPolicy]]:
        """
        Parse feeds and the inbound policy from an already loaded store.

        Args:
            store: Sections of one feed-definition document
            source: Name used in error messages

        Returns:
            Tuple of (feeds, inbound_policy); inbound_policy is None
            when the document has no [global] section

        Raises:
            ConfigError: If a feed-NAME section has no matching NAME section
        """
        inbound = None
        opts = store.section(GLOBAL_SECTION)
        if opts is not None:
            inbound = FeedPolicy(opts)

        feeds: List[FeedConfig] = []
        for sect_name, opts in store.find(FEED_PREFIX + "*"):
            name = sect_name[len(FEED_PREFIX) :]
            if not name:
                continue

            feed = self.parse_feed(name, opts)

            rules = store.section(name)
            if rules is None:
                msg = "no section [%s] in %s; feed [%s] has no policy" % (
                    name,
                    source,
                    sect_name,
                )
                self.log(msg, 1)
                raise ConfigError(msg, source)

            feed.policy = FeedPolicy(rules)
            feeds.append(feed)

        return feeds, inbound

    def parse_feed(self, name: str, opts: dict) -> FeedConfig:
        """Build the connection side of one feed from its feed-NAME options."""
        feed = FeedConfig(name)

        ptype = opts.get("proxy-type", "")
        if ptype and ptype.lower() != "none":
            feed.proxy_type = ptype.lower()
            phost = opts.get("proxy-host", "").strip(" ")
            pport = opts.get("proxy-port", "").strip(" ")
            feed.proxy_addr = join_host_port(phost, pport)

        host = opts.get("host", "")
        port = opts.get("port", "")
        if host and port:
            feed.addr = join_host_port(host, port)
        else:
            # section named after the peer address, [feed-host:port]
            feed.addr = name.strip(" ")

        if is_one(opts.get("sync")):
            feed.set_sync(
                True, map_get_int(opts, "sync-interval", SYNC_INTERVAL_MIN)
            )

        feed.disable = is_one(opts.get("disable"))
        feed.connections = map_get_int(opts, "connections", 1)
        feed.username = opts.get("username", "")
        feed.password = opts.get("password", "")
        feed.tls_off = is_one(opts.get("disabletls"))
        return feed


class FeedWriter:
    """Serialize feeds back into the layout FeedParser reads."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize writer with logging function.

        Args:
            log_func: Function for logging messages (msg, level)
        """
        self.log = log_func

    def build(
        self, feeds: Sequence[FeedConfig], inbound: Optional[FeedPolicy]
    ) -> SectionStore:
        """
        Lay out `feeds` and the inbound policy as one feed-definition document.

        Feeds without a name are skipped. When several feeds share a name,
        only the last one is written, the same one NodeConfig.find_feed
        returns.

        Raises:
            ConfigError: If a feed name would collide with [global] or
                with another feed's connection section
        """
        store = SectionStore(self.log)

        if inbound is not None:
            store.new_section(GLOBAL_SECTION).update(inbound.rules())

        last = {}
        for feed in feeds:
            if not feed.name:
                continue

            if feed.name == GLOBAL_SECTION or feed.name.startswith(FEED_PREFIX):
                msg = "cannot write feed [%s]; the name is reserved" % (feed.name,)
                self.log(msg, 1)
                raise ConfigError(msg)

            last[feed.name] = feed

        for feed in feeds:
            if not feed.name:
                continue

            if last[feed.name] is not feed:
                t = "feed [%s] is defined more than once; keeping the last one (%s)"
                self.log(t % (feed.name, last[feed.name].addr), 3)
                continue

            sect = store.new_section(FEED_PREFIX + feed.name)
            if feed.proxy_type:
                sect.add("proxy-type", feed.proxy_type)

            phost, pport = split_host_port(feed.proxy_addr)
            sect.add("proxy-host", phost)
            sect.add("proxy-port", pport)

            host, port = split_host_port(feed.addr)
            sect.add("host", host)
            sect.add("port", port)

            sect.add("sync", "1" if feed.sync else "0")
            sect.add("sync-interval", str(int(feed.sync_interval)))
            sect.add("username", feed.username)
            sect.add("password", feed.password)
            sect.add("connections", str(feed.connections))
            if feed.disable:
                sect.add("disable", "1")
            if feed.tls_off:
                sect.add("disabletls", "1")

            store.new_section(feed.name).update(feed.policy.rules())

        return store

    def save(
        self,
        path: str,
        feeds: Sequence[FeedConfig],
        inbound: Optional[FeedPolicy],
    ) -> None:
        """Overwrite `path` with the given feeds and inbound policy."""
        store = self.build(feeds, inbound)
        store.save(path)
        n = len(store.find(FEED_PREFIX + "*"))
        self.log("saved %d feeds to %s" % (n, path), 6)
