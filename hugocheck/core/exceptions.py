#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for hugocheck.

These exceptions are raised by collaborators (configuration loaders, file
readers, the remote spell checker). The validation engine converts any of
them into a fatal issue, so a single failure ends the run.

Exception Hierarchy:
    Exception (built-in)
    └── CheckerError - Base for all checker errors
        ├── ConfigError - Rule-set or site configuration problems
        ├── DocumentParseError - A Markdown page cannot be split or parsed
        ├── LanguageDetectionError - Body language cannot be detected
        └── SpellCheckError - Remote spell check failed or is unavailable

Usage:
    from hugocheck.core.exceptions import ConfigError

    try:
        ruleset = load_ruleset(path)
    except ConfigError as e:
        logger.log_error(e, {"path": str(path)})
"""


class CheckerError(Exception):
    """
    Base exception for hugocheck errors.

    Catch this to handle any error raised by a hugocheck collaborator.

    Examples:
        >>> raise CheckerError("Folder '/site/content' doesn't exist")
    """

    pass


class ConfigError(CheckerError):
    """
    Exception for configuration failures.

    Raised when a rule-set file or the site configuration:
    - does not exist
    - is not a YAML mapping
    - has a key with the wrong type (e.g. `languages` is not a list)

    Examples:
        >>> raise ConfigError("Key 'languages' must be a list")
        >>> raise ConfigError("Hugo configuration file '/site/config.yaml' doesn't exist")
    """

    pass


class DocumentParseError(CheckerError):
    """
    Exception for Markdown page parsing failures.

    Raised when a page has no front-matter delimiters or its header is not
    valid YAML.

    Examples:
        >>> raise DocumentParseError("Starting '---' not found for header")
    """

    pass


class SpellCheckError(CheckerError):
    """
    Exception for remote spell check failures.

    Raised when the OpenAI client cannot be initialised, the request fails,
    or the response cannot be interpreted.

    Examples:
        >>> raise SpellCheckError("Undefined chatgpt-api-key. ChatGPT is not available.")
    """

    pass


class LanguageDetectionError(CheckerError):
    """
    Exception for local language detection failures.

    Raised when a body has no detectable language features (e.g. it only
    contains numbers or code) or the detected code is not a known locale.

    Examples:
        >>> raise LanguageDetectionError("No features in text.")
    """

    pass
