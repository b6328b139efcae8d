"""Feed propagation policy.

A policy maps newsgroup pattern keys to decision strings ("1" allows,
anything else denies). Keys are looked up by specificity:

1. exact: the key equals the newsgroup
2. hierarchy: the longest key that is a dotted ancestor of the newsgroup
   (`overchan` or `overchan.*` covers `overchan.test`)
3. wildcard: `*`

A newsgroup no key covers is denied.
"""

from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

WILDCARD = "*"
ALLOW = "1"
DENY = "0"


class FeedPolicy:
    """Ordered newsgroup rule set for one feed, or the inbound default."""

    def __init__(self, rules: Optional[Mapping[str, str]] = None):
        self._rules: Dict[str, str] = {}
        if rules:
            for k, v in rules.items():
                self.set(k, v)

    def set(self, key: str, value: str) -> None:
        # last write wins, but keeps the key at its latest position
        self._rules.pop(key, None)
        self._rules[key] = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._rules.get(key, default)

    def rules(self) -> Dict[str, str]:
        return dict(self._rules)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._rules.items()))

    def copy(self) -> "FeedPolicy":
        return FeedPolicy(self._rules)

    def merged_over(self, baseline: Optional["FeedPolicy"]) -> "FeedPolicy":
        """New policy with `baseline` beneath and these rules on top."""
        ret = FeedPolicy(baseline._rules if baseline else None)
        for k, v in self._rules.items():
            ret.set(k, v)
        return ret

    def match(self, newsgroup: str) -> Optional[str]:
        """Key deciding `newsgroup`, or None if nothing covers it."""
        if newsgroup in self._rules:
            return newsgroup

        best = None
        best_len = -1
        for key in self._rules:
            hier = key[:-2] if key.endswith(".*") else key
            if hier == WILDCARD or not hier:
                continue

            if newsgroup.startswith(hier + ".") and len(hier) > best_len:
                best = key
                best_len = len(hier)

        if best is not None:
            return best

        if WILDCARD in self._rules:
            return WILDCARD

        return None

    def allows(self, newsgroup: str) -> bool:
        key = self.match(newsgroup)
        if key is None:
            return False

        return self._rules[key].strip() == ALLOW

    def decide(self, newsgroups: Iterable[str]) -> Dict[str, bool]:
        return {g: self.allows(g) for g in newsgroups}

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeedPolicy):
            return NotImplemented
        return self._rules == other._rules

    def __repr__(self) -> str:
        return "FeedPolicy(%r)" % (self._rules,)
