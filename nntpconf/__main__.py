# coding: utf-8
from __future__ import print_function, unicode_literals

import argparse
import os
import sys
from typing import List, Optional

from . import ENV_INI_PATH, S_VERSION
from .config import FeedWriter, StartupOrchestrator
from .i18n import Locale
from .util import ConfigError, PrintLogger, named


def get_args(argv: Optional[List[str]]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="nntpconf",
        description="load, check and inspect srnd.ini / feeds.ini",
    )
    ap.add_argument("-C", metavar="DIR", default=".", help="config directory (default: cwd)")
    ap.add_argument("--gen", action="store_true", help="write default srnd.ini / feeds.ini if missing, then exit")
    ap.add_argument("--no-gen", action="store_true", help="do not create missing config files")
    ap.add_argument("--check", action="store_true", help="print a summary of the resolved config")
    ap.add_argument("--table", metavar="GROUP", nargs="+", help="print the allow/deny table for these newsgroups")
    ap.add_argument("--dump-feeds", metavar="PATH", help="write the resolved feeds back out as a feeds.ini")
    ap.add_argument("--nc", action="store_true", help="no colors")
    ap.add_argument("--version", action="version", version="nntpconf " + S_VERSION)
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    al = get_args(argv)
    root = PrintLogger(color=False if al.nc else None)
    log = named(root, "nntpconf")

    orch = StartupOrchestrator(log, al.C, os.environ)
    try:
        if al.gen:
            for fp in orch.check_config():
                log("wrote %s" % (fp,), 6)
            return 0

        cfg = orch.load(not al.no_gen)
    except ConfigError as ex:
        log("fatal: %s" % (ex,), 1)
        if ENV_INI_PATH in os.environ:
            log("(%s=%s)" % (ENV_INI_PATH, os.environ[ENV_INI_PATH]), 3)
        return 1

    if al.check:
        for k, v in cfg.summary():
            print("%-10s %s" % (k, v))
        if cfg.frontend_enabled:
            try:
                loc = Locale.for_frontend(cfg.frontend, al.C, log)
                print("%-10s %s" % ("locale", loc.tag))
            except ConfigError as ex:
                log("frontend translations: %s" % (ex,), 3)
        for feed in cfg.feeds:
            print("%-10s %r" % ("feed", feed))

    if al.table:
        table = cfg.decision_table(al.table)
        for name, row in table.items():
            zs = " ".join("%s=%s" % (g, "allow" if ok else "deny") for g, ok in row.items())
            print("%s: %s" % (name, zs))

    if al.dump_feeds:
        try:
            FeedWriter(log).save(al.dump_feeds, cfg.feeds, cfg.inbound_policy)
        except ConfigError as ex:
            log("%s" % (ex,), 1)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
