"""Unit tests for feed propagation policy."""

import unittest

from nntpconf.config.policy import FeedPolicy


class TestFeedPolicy(unittest.TestCase):
    """Test FeedPolicy class."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.policy = FeedPolicy({"overchan.overchan": "1", "ctl": "1", "*": "0"})

    def test_global_example(self) -> None:
        """Listed groups allow, anything else falls through to `*`."""
        self.assertTrue(self.policy.allows("overchan.overchan"))
        self.assertTrue(self.policy.allows("ctl"))
        self.assertFalse(self.policy.allows("overchan.random"))
        self.assertFalse(self.policy.allows("alt.test"))
        self.assertEqual(self.policy.match("alt.test"), "*")

    def test_rules_verbatim(self) -> None:
        self.assertEqual(
            self.policy.rules(), {"overchan.overchan": "1", "ctl": "1", "*": "0"}
        )
        self.assertEqual(list(self.policy.rules()), ["overchan.overchan", "ctl", "*"])

    def test_exact_beats_hierarchy(self) -> None:
        policy = FeedPolicy({"overchan": "1", "overchan.spam": "0", "*": "1"})
        self.assertFalse(policy.allows("overchan.spam"))
        self.assertTrue(policy.allows("overchan.test"))
        self.assertEqual(policy.match("overchan.spam"), "overchan.spam")
        self.assertEqual(policy.match("overchan.test"), "overchan")

    def test_hierarchy_beats_wildcard(self) -> None:
        policy = FeedPolicy({"*": "1", "overchan.*": "0"})
        self.assertFalse(policy.allows("overchan.test"))
        self.assertTrue(policy.allows("alt.test"))

    def test_longest_hierarchy_wins(self) -> None:
        policy = FeedPolicy({"overchan": "0", "overchan.boards": "1", "*": "0"})
        self.assertTrue(policy.allows("overchan.boards.b"))
        self.assertFalse(policy.allows("overchan.other.b"))

    def test_hierarchy_needs_dot_boundary(self) -> None:
        policy = FeedPolicy({"overchan": "1"})
        self.assertFalse(policy.allows("overchanx.test"))
        self.assertIsNone(policy.match("overchanx.test"))

    def test_no_match_denies(self) -> None:
        policy = FeedPolicy({"ctl": "1"})
        self.assertFalse(policy.allows("alt.test"))
        self.assertFalse(FeedPolicy().allows("ctl"))

    def test_non_one_values_deny(self) -> None:
        policy = FeedPolicy({"a": "yes", "b": "true", "c": "", "d": " 1 "})
        self.assertFalse(policy.allows("a"))
        self.assertFalse(policy.allows("b"))
        self.assertFalse(policy.allows("c"))
        self.assertTrue(policy.allows("d"))

    def test_set_last_write_wins(self) -> None:
        self.policy.set("ctl", "0")
        self.assertFalse(self.policy.allows("ctl"))
        self.assertEqual(len(self.policy), 3)
        self.assertEqual(list(self.policy.rules())[-1], "ctl")

    def test_copy_is_independent(self) -> None:
        other = self.policy.copy()
        other.set("ctl", "0")
        self.assertTrue(self.policy.allows("ctl"))
        self.assertEqual(self.policy.get("ctl"), "1")

        backing = {"ctl": "1"}
        policy = FeedPolicy(backing)
        backing["ctl"] = "0"
        self.assertTrue(policy.allows("ctl"))

    def test_merged_over_baseline(self) -> None:
        feed = FeedPolicy({"overchan.test": "1", "ctl": "0"})
        merged = feed.merged_over(self.policy)

        self.assertTrue(merged.allows("overchan.test"))
        self.assertTrue(merged.allows("overchan.overchan"))
        self.assertFalse(merged.allows("ctl"))
        self.assertFalse(merged.allows("alt.test"))
        # neither input changes
        self.assertEqual(self.policy.get("ctl"), "1")
        self.assertNotIn("*", feed)

    def test_merged_over_none(self) -> None:
        feed = FeedPolicy({"ctl": "1"})
        self.assertEqual(feed.merged_over(None), feed)

    def test_decide(self) -> None:
        self.assertEqual(
            self.policy.decide(["ctl", "alt.test"]), {"ctl": True, "alt.test": False}
        )


if __name__ == "__main__":
    unittest.main()
