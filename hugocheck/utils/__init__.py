"""
Utilities package for hugocheck.

- md: Front matter splitting and Markdown body parsing
- yaml_access: Null-safe lookups on parsed YAML mappings

Import commonly-used utilities directly from this package:
    from hugocheck.utils import split_frontmatter, get_string
"""

from .md import (
    split_frontmatter,
    parse_body,
    extract_prose,
)

from .yaml_access import (
    load_yaml,
    parse_yaml,
    contains,
    get_string,
    get_list,
)

__all__ = [
    "split_frontmatter",
    "parse_body",
    "extract_prose",
    "load_yaml",
    "parse_yaml",
    "contains",
    "get_string",
    "get_list",
]
