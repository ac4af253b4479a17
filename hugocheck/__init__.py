"""
hugocheck
=========

Consistency checks for translated Hugo content.

Every folder of a Hugo site that contains a `hugo-checker.yaml` is checked
against the rules declared there: required front-matter fields, allowed
list values per language, slug format, duplicate header values, one file
per declared language, and optionally the language or spelling of each
page body.

Main Components:
    - validators: Validation engine, rules, file resolution and CLI
    - dataclasses: Rule sets, site configuration and the content tree
    - nlp: Local language detection and remote spell checking
    - core: Logging, exceptions, paths and CLI helpers
    - utils: Front matter and YAML helpers

Primary Interfaces:
    - hugocheck.validators.cli: `hugocheck` command
    - hugocheck.validators.checker.Checker: programmatic entry point

Example Usage:
    >>> from pathlib import Path
    >>> from hugocheck.validators.checker import Checker
    >>> report = Checker(Path("site")).run()
    >>> report.passed
    True
"""
