# coding: utf-8
"""Configuration loading and feed policy resolution for an NNTP node."""
from __future__ import print_function, unicode_literals

import os
import sys
from typing import TYPE_CHECKING

VERSION = (0, 4, 0)
S_VERSION = ".".join(map(str, VERSION))

WINDOWS = sys.platform.startswith("win")
VT100 = not WINDOWS or bool(os.environ.get("WT_SESSION"))

# overrides for the default file locations; only used when the file exists
ENV_INI_PATH = "SRND_INI_PATH"
ENV_FEEDS_INI_PATH = "SRND_FEEDS_INI_PATH"
ENV_FEEDS_DIR = "SRND_FEEDS_DIR"

INI_NAME = "srnd.ini"
FEEDS_INI_NAME = "feeds.ini"
