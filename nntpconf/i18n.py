# coding: utf-8
"""Frontend translations.

A translations directory holds one `<language-tag>.ini` per locale, each
with a [formats] and a [strings] section. The Locale is loaded once and
passed to whatever renders user-facing text.
"""
from __future__ import print_function, unicode_literals

import os
from typing import Callable, Dict, List, Optional

from .config.section_store import SectionStore
from .util import ConfigError

FALLBACK_TAGS = ("en-US", "en")


def _norm(tag: str) -> str:
    return tag.replace("_", "-").lower()


def available_tags(directory: str) -> List[str]:
    try:
        names = sorted(os.listdir(directory))
    except OSError as ex:
        raise ConfigError("cannot list translations in %s: %s" % (directory, ex)) from ex

    return [x[:-4] for x in names if x.endswith(".ini") and len(x) > 4]


def best_tag(want: str, have: List[str]) -> Optional[str]:
    """exact tag, then same primary language, then en-US/en"""
    by_norm = {_norm(x): x for x in have}

    zs = _norm(want)
    if zs in by_norm:
        return by_norm[zs]

    lang = zs.split("-")[0]
    if lang:
        for x in have:
            if _norm(x).split("-")[0] == lang:
                return x

    for fb in FALLBACK_TAGS:
        if _norm(fb) in by_norm:
            return by_norm[_norm(fb)]

    return None


class Locale(object):
    def __init__(
        self, name: str, tag: str, formats: Dict[str, str], strings: Dict[str, str]
    ) -> None:
        self.name = name
        self.tag = tag
        self.formats = formats
        self.translations = strings

    @classmethod
    def load(
        cls,
        locale: str,
        directory: str,
        log_func: Optional[Callable[[str, int], None]] = None,
    ) -> "Locale":
        """Load the translation file that best fits `locale`.

        Raises:
            ConfigError: If no file fits or the chosen one lacks a section
        """
        tag = best_tag(locale, available_tags(directory))
        if tag is None:
            raise ConfigError("no translation for %r in %s" % (locale, directory))

        if log_func:
            log_func("locale %r => %s" % (locale, tag), 6)

        fp = os.path.join(directory, tag + ".ini")
        conf = SectionStore.from_file(fp, log_func)
        formats = conf.section("formats")
        strings = conf.section("strings")
        if formats is None or strings is None:
            raise ConfigError("%s needs both [formats] and [strings]" % (fp,), fp)

        return cls(locale, tag, formats, strings)

    @classmethod
    def for_frontend(
        cls,
        frontend: Dict[str, str],
        workdir: str = ".",
        log_func: Optional[Callable[[str, int], None]] = None,
    ) -> "Locale":
        """Locale named by the [frontend] `locale` and `translations` options."""
        directory = frontend.get("translations") or os.path.join(
            "contrib", "translations"
        )
        if not os.path.isabs(directory):
            directory = os.path.join(workdir, directory)

        return cls.load(frontend.get("locale") or "en", directory, log_func)

    def translate(self, key: str) -> str:
        return self.translations.get(key, "")

    def format(self, key: str) -> str:
        return self.formats.get(key, "")
