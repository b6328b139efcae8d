"""Configuration resolver.

Reads srnd.ini and the feed-definition documents into a NodeConfig:
- primary sections, in order: pprof, hook-*, crypto, nntp, database,
  cache, articles, frontend, spamd, thumbnails
- feeds.ini, then every *.ini in the feeds directory
- the content filter file
- validation of the required keys
"""

import glob
import os
from typing import Callable, Dict, List, Mapping, Optional

from .. import (
    ENV_FEEDS_DIR,
    ENV_FEEDS_INI_PATH,
    ENV_INI_PATH,
    FEEDS_INI_NAME,
    INI_NAME,
)
from ..util import ConfigError, check_file, env_path, is_one, resolve_in
from .feeds import FeedParser
from .model import (
    CryptoConfig,
    HookConfig,
    NodeConfig,
    ProfilingConfig,
    SpamConfig,
    ThumbnailConfig,
)
from .section_store import SectionStore
from .validators import ConfigValidator

DEFAULT_FILTERS_FILE = "filters.txt"


class ConfigResolver:
    """Resolve srnd.ini + feeds into a validated NodeConfig."""

    def __init__(
        self,
        log_func: Callable[[str, int], None],
        workdir: str = ".",
        env: Optional[Mapping[str, str]] = None,
    ):
        """Initialize resolver.

        Args:
            log_func: Function for logging messages (msg, level)
            workdir: Directory holding srnd.ini/feeds.ini; relative paths
                in the config are resolved against it
            env: Environment for the SRND_* path overrides
        """
        self.log = log_func
        self.workdir = workdir
        self.env = os.environ if env is None else env

    def default_primary_path(self) -> str:
        return os.path.join(self.workdir, INI_NAME)

    def default_feeds_path(self) -> str:
        return os.path.join(self.workdir, FEEDS_INI_NAME)

    def primary_path(self) -> str:
        """
        Path of the primary config; env override wins if the file exists.

        Raises:
            ConfigError: If neither the override nor srnd.ini exists
        """
        fp = env_path(self.env, ENV_INI_PATH)
        if fp:
            self.log("found config at %s" % (fp,), 6)
            return fp

        fp = self.default_primary_path()
        if not check_file(fp):
            raise ConfigError("cannot read config file %s" % (fp,), fp)

        return fp

    def feeds_path(self) -> str:
        fp = env_path(self.env, ENV_FEEDS_INI_PATH)
        if fp:
            self.log("found feeds config at %s" % (fp,), 6)
            return fp

        return self.default_feeds_path()

    def read(self) -> NodeConfig:
        """Load, resolve and validate the full configuration.

        Returns:
            Validated NodeConfig

        Raises:
            ConfigError: On any missing load-bearing section or file,
                malformed filter, inconsistent feed or failed validation
        """
        fp = self.primary_path()
        conf = SectionStore.from_file(fp, self.log)
        cfg = self.resolve(conf, fp)

        self.load_feeds(cfg)
        self.load_filters(cfg)

        ConfigValidator(self.log).validate(cfg)
        return cfg

    def resolve(self, conf: SectionStore, source: str = INI_NAME) -> NodeConfig:
        """Build the non-feed part of the config from the primary document."""
        cfg = NodeConfig()

        cfg.pprof = self._read_pprof(conf)
        cfg.hooks = self._read_hooks(conf)
        cfg.crypto = self._read_crypto(conf)
        cfg.daemon = self._require(conf, "nntp", source)
        cfg.database = self._require(conf, "database", source)
        cfg.cache = self._read_cache(conf)
        cfg.store = self._require(conf, "articles", source)
        cfg.frontend = self._read_frontend(conf)
        cfg.spamconf = self._read_spamd(conf)
        cfg.thumbnails = self._read_thumbnails(conf, cfg.store)
        return cfg

    def _require(self, conf: SectionStore, name: str, source: str) -> Dict[str, str]:
        opts = conf.section(name)
        if opts is None:
            msg = "no section '%s' in %s" % (name, source)
            self.log(msg, 1)
            raise ConfigError(msg, source)

        return opts

    def _read_pprof(self, conf: SectionStore) -> Optional[ProfilingConfig]:
        opts = conf.section("pprof")
        if opts is None:
            return None

        return ProfilingConfig(is_one(opts.get("enable")), opts.get("bind", ""))

    def _read_hooks(self, conf: SectionStore) -> List[HookConfig]:
        ret = []
        for name, opts in conf.find("hook-*"):
            ret.append(
                HookConfig(name, opts.get("exec", ""), is_one(opts.get("enable")))
            )
        return ret

    def _read_crypto(self, conf: SectionStore) -> Optional[CryptoConfig]:
        opts = conf.section("crypto")
        if opts is None:
            t = "!!! we will not use encryption for nntp as no crypto section is specified in srnd.ini"
            self.log(t, 3)
            return None

        k = opts.get("tls-keyname", "")
        h = opts.get("tls-hostname", "")
        if not h or h.startswith("!"):
            msg = "please set tls-hostname to be the hostname or ip address of your server"
            self.log(msg, 1)
            raise ConfigError(msg)

        cert_dir = opts.get("tls-trust-dir", "")
        return CryptoConfig(
            hostname=h,
            privkey_file="%s-%s.key" % (k, h),
            cert_file=os.path.join(cert_dir, "%s-%s.crt" % (k, h)),
            cert_dir=cert_dir,
        )

    def _read_cache(self, conf: SectionStore) -> Dict[str, str]:
        opts = conf.section("cache")
        if opts is None:
            self.log("no section 'cache' in srnd.ini; falling back to file cache", 3)
            return {"type": "file"}

        return opts

    def _read_frontend(self, conf: SectionStore) -> Dict[str, str]:
        opts = conf.section("frontend")
        if opts is None:
            self.log("no frontend section in srnd.ini, disabling frontend", 3)
            return {"enable": "0"}

        opts.setdefault("enable", "0")
        if opts["enable"] == "1":
            self.log("frontend enabled in srnd.ini", 6)
        else:
            self.log("frontend not enabled in srnd.ini, disabling frontend", 6)

        return opts

    def _read_spamd(self, conf: SectionStore) -> SpamConfig:
        opts = conf.section("spamd")
        if opts is None:
            return SpamConfig()

        ret = SpamConfig(is_one(opts.get("enable")))
        if ret.enabled:
            ret.addr = opts.get("addr", "")
            self.log("spamd enabled at %s" % (ret.addr,), 6)

        return ret

    def _read_thumbnails(
        self, conf: SectionStore, store: Dict[str, str]
    ) -> Optional[ThumbnailConfig]:
        opts = conf.section("thumbnails")
        if opts is None:
            return None

        ret = ThumbnailConfig(store.get("placeholder_thumbnail", ""))
        ret.load(opts)
        self.log("loaded %d thumbnail rules" % (len(ret.rules),), 6)
        return ret

    def feeds_dir(self, cfg: NodeConfig) -> str:
        fp = env_path(self.env, ENV_FEEDS_DIR, want_dir=True)
        if fp:
            return fp

        fp = cfg.daemon.get("feeds", "")
        return resolve_in(self.workdir, fp) if fp else ""

    def load_feeds(self, cfg: NodeConfig) -> None:
        """Append feeds from feeds.ini and the feeds directory to `cfg`.

        Only feeds.ini contributes the inbound policy; [global] sections
        in the feeds directory are ignored.
        """
        parser = FeedParser(self.log)

        fp = self.feeds_path()
        feeds, cfg.inbound_policy = parser.parse(fp)
        cfg.feeds.extend(feeds)

        fdir = self.feeds_dir(cfg)
        if not fdir:
            return

        for fp in sorted(glob.glob(os.path.join(fdir, "*.ini"))):
            self.log("load feed %s" % (fp,), 6)
            feeds, _ = parser.parse(fp)
            cfg.feeds.extend(feeds)

    def load_filters(self, cfg: NodeConfig) -> None:
        fp = cfg.daemon.get("filters_file") or DEFAULT_FILTERS_FILE
        fp = resolve_in(self.workdir, fp)
        if not check_file(fp):
            return

        self.log("loading content filter file %s" % (fp,), 6)
        cfg.filter.log = self.log
        n = cfg.filter.load(fp)
        self.log("loaded %d filters" % (n,), 6)
