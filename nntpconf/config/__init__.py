"""Configuration management for nntpconf.

This package provides modular components for reading srnd.ini and the
feed-definition documents into a validated node configuration.

Modules:
- section_store: ini documents as ordered, named sections
- filters: global content filter patterns
- policy: per-feed newsgroup allow/deny rules
- model: feed and aggregate configuration objects
- feeds: feed-definition parsing and writing
- resolver: srnd.ini + feeds -> NodeConfig
- validators: required-key checks
- defaults: default document generation
- orchestrator: startup sequence
"""

from .section_store import SectionStore
from .filters import FilterSet
from .policy import FeedPolicy
from .model import FeedConfig, NodeConfig
from .feeds import FeedParser, FeedWriter
from .validators import ConfigValidator
from .defaults import DefaultGenerator
from .resolver import ConfigResolver
from .orchestrator import StartupOrchestrator, run_startup

__all__ = [
    "SectionStore",
    "FilterSet",
    "FeedPolicy",
    "FeedConfig",
    "NodeConfig",
    "FeedParser",
    "FeedWriter",
    "ConfigValidator",
    "DefaultGenerator",
    "ConfigResolver",
    "StartupOrchestrator",
    "run_startup",
]
