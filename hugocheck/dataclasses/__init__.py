"""
Dataclasses for hugocheck configuration and content.

- ruleset: RuleSet, HeaderKey, SpellCheckOptions, SiteConfig and loaders
- content: Folder, Document, LanguageVariant
"""

from .ruleset import (
    HeaderKind,
    HeaderKey,
    SpellCheckOptions,
    RuleSet,
    SiteConfig,
    load_ruleset,
    load_site_config,
)
from .content import LanguageVariant, Document, Folder

__all__ = [
    "HeaderKind",
    "HeaderKey",
    "SpellCheckOptions",
    "RuleSet",
    "SiteConfig",
    "load_ruleset",
    "load_site_config",
    "LanguageVariant",
    "Document",
    "Folder",
]
