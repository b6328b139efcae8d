"""Default srnd.ini / feeds.ini generation.

Used on first start when no configuration exists yet. Every value is fixed
except the daemon signing key and the frontend api secret, which are fresh
random secrets on every run.
"""

import base64
import os
import secrets
import socket
from typing import Callable, List, Mapping, Optional

from .. import ENV_FEEDS_INI_PATH, ENV_INI_PATH
from ..util import check_file, env_path
from .section_store import SectionStore

PLACEHOLDER_HOSTNAME = "!!please-manually-set-this"


def gen_secretkey() -> str:
    return secrets.token_hex(32)


def gen_api_secret() -> str:
    return base64.b32encode(secrets.token_bytes(8)).decode("ascii")


def local_hostname() -> str:
    try:
        return socket.gethostname() or PLACEHOLDER_HOSTNAME
    except OSError:
        return PLACEHOLDER_HOSTNAME


class DefaultGenerator:
    """Produce complete default configuration documents."""

    def __init__(
        self,
        log_func: Callable[[str, int], None],
        hostname_func: Callable[[], str] = local_hostname,
    ):
        """Initialize generator.

        Args:
            log_func: Function for logging messages (msg, level)
            hostname_func: Returns the value for [crypto] tls-hostname
        """
        self.log = log_func
        self.hostname_func = hostname_func

    def gen_primary(self) -> SectionStore:
        conf = SectionStore(self.log)

        conf.new_section("nntp").update(
            {
                "instance_name": "test.srndv2.tld",
                "bind": ":1199",
                "sync_on_start": "1",
                "allow_anon": "0",
                "allow_anon_attachments": "0",
                "allow_attachments": "1",
                "require_tls": "1",
                "anon_nntp": "0",
                "feeds": os.path.join(".", "feeds.d"),
                "archive": "0",
                "article_lifetime": "0",
                "filters_file": "filters.txt",
                "secretkey": gen_secretkey(),
            }
        )

        conf.new_section("spamd").add("enable", "0").add("addr", "127.0.0.1:783")
        conf.new_section("pprof").add("enable", "0").add("bind", "127.0.0.1:17000")
        conf.new_section("hook-dummy").add("enable", "0").add("exec", "/bin/true")

        conf.new_section("crypto").update(
            {
                "tls-keyname": "overchan",
                "tls-hostname": self.hostname_func() or PLACEHOLDER_HOSTNAME,
                "tls-trust-dir": "certs",
            }
        )

        conf.new_section("articles").update(
            {
                "store_dir": "articles",
                "incoming_dir": "articles/tmp",
                "attachments_dir": "webroot/img",
                "thumbs_dir": "webroot/thm",
                "convert_bin": "/usr/bin/convert",
                "ffmpegthumbnailer_bin": "/usr/bin/ffmpeg",
                "sox_bin": "/usr/bin/sox",
                "identify_bin": "/usr/bin/identify",
                "placeholder_thumbnail": "contrib/static/placeholder.png",
                "compression": "0",
            }
        )

        conf.new_section("thumbnails").update(
            {
                "image/*": "{{.convert}} -thumbnail 200 {{.infile}} {{.outfile}}",
                "image/gif": "{{.convert}} -thumbnail 200 {{.infile}}[0] {{.outfile}}",
                "audio/*": "{{.ffmpeg}} -i {{.infile}} -an -vcodec copy {{.outfile}}",
                "video/*": "{{.ffmpeg}} -i {{.infile}} -vf scale=300:200 -vframes 1 {{.outfile}}",
                "*": "cp {{.placeholder}} {{.outfile}}",
            }
        )

        conf.new_section("database").update(
            {
                "type": "postgres",
                "schema": "srnd",
                "host": "/var/run/postgresql",
                "port": "",
                "user": "",
                "password": "",
                "maxconns": "10",
                "connlife": "10",
                "connidle": "10",
            }
        )

        # null cache unless configured otherwise
        conf.new_section("cache").add("type", "null")

        conf.new_section("frontend").update(
            {
                "enable": "1",
                "allow_files": "1",
                "regen_on_start": "0",
                "regen_threads": "2",
                "board_creation": "1",
                "bind": "[::]:18000",
                "name": "web.srndv2.test",
                "webroot": "webroot",
                "minimize_html": "0",
                "prefix": "/",
                "static_files": "contrib",
                "templates": "contrib/templates/placebo",
                "translations": "contrib/translations",
                "markup_script": "contrib/lua/memeposting.lua",
                "locale": "en",
                "domain": "localhost",
                "json-api": "0",
                "json-api-username": "change-this-value",
                "json-api-password": "change-this-value-too",
                "api-secret": gen_api_secret(),
            }
        )
        return conf

    def gen_feeds(self) -> SectionStore:
        conf = SectionStore(self.log)

        conf.new_section("global").update(
            {"overchan.overchan": "1", "ctl": "1", "*": "0"}
        )

        conf.new_section("feed-2hu").update(
            {
                "proxy-type": "None",
                "proxy-host": "127.0.0.1",
                "proxy-port": "9050",
                "host": "2hu-ch.org",
                "port": "119",
                "connections": "0",
                "sync": "1",
                "disable": "1",
            }
        )

        conf.new_section("2hu").update(
            {"overchan.overchan": "1", "ctl": "1", "*": "0"}
        )
        return conf

    def ensure(
        self,
        primary_path: str,
        feeds_path: str,
        env: Optional[Mapping[str, str]] = None,
    ) -> List[str]:
        """Write default documents for whichever file is missing.

        An existing file, or an env override pointing at an existing file,
        is never touched.

        Args:
            primary_path: Where srnd.ini belongs
            feeds_path: Where feeds.ini belongs
            env: Environment for SRND_INI_PATH / SRND_FEEDS_INI_PATH

        Returns:
            Paths of the files that were written
        """
        env = os.environ if env is None else env
        ret = []

        if not (check_file(primary_path) or env_path(env, ENV_INI_PATH)):
            self.log("no config found; creating %s" % (primary_path,), 3)
            self.gen_primary().save(primary_path)
            ret.append(primary_path)

        if not (check_file(feeds_path) or env_path(env, ENV_FEEDS_INI_PATH)):
            self.log("no feeds config found; creating %s" % (feeds_path,), 3)
            self.gen_feeds().save(feeds_path)
            ret.append(feeds_path)

        return ret
