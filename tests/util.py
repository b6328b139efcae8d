"""Shared fixtures for the config tests."""

import os

PRIMARY_INI = """\
[pprof]
enable = 0
bind = 127.0.0.1:17000

[hook-dummy]
enable = 0
exec = /bin/true

[hook-notify]
enable = 1
exec = /usr/local/bin/notify

[nntp]
instance_name = test.srndv2.tld
bind = :1199
allow_anon = 0
allow_anon_attachments = 0
filters_file = filters.txt

[database]
type = postgres
schema = srnd
host = /var/run/postgresql
port =
user =
password =

[articles]
store_dir = articles
incoming_dir = articles/tmp
attachments_dir = webroot/img
thumbs_dir = webroot/thm
placeholder_thumbnail = contrib/static/placeholder.png

[thumbnails]
image/* = {{.convert}} -thumbnail 200 {{.infile}} {{.outfile}}
image/gif = {{.convert}} -thumbnail 200 {{.infile}}[0] {{.outfile}}
* = cp {{.placeholder}} {{.outfile}}
"""

FEEDS_INI = """\
[global]
overchan.overchan = 1
ctl = 1
* = 0

[feed-2hu]
proxy-type = None
proxy-host = 127.0.0.1
proxy-port = 9050
host = 2hu-ch.org
port = 119
sync = 1

[2hu]
overchan.overchan = 1
ctl = 1
* = 0
"""


def write(dirpath: str, name: str, text: str) -> str:
    fp = os.path.join(dirpath, name)
    parent = os.path.dirname(fp)
    if parent and not os.path.isdir(parent):
        os.makedirs(parent)

    with open(fp, "w", encoding="utf-8") as f:
        f.write(text)

    return fp


def noop_log(msg: str, level: int = 0) -> None:
    return None
