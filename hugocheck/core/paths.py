#!/usr/bin/env python3
"""
paths.py
-------------------
File names and default locations used by hugocheck.

The checker works on a Hugo site supplied at runtime, so the only fixed
paths are the configuration file names it searches for and the default
log directory (relative to the working directory).
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path

# ----- Configuration files -----
RULESET_FILENAME = "hugo-checker.yaml"
SITE_CONFIG_FILENAME = "config.yaml"

# ----- Content files -----
MARKDOWN_EXTENSION = ".md"
MARKDOWN_PATTERN = f"*{MARKDOWN_EXTENSION}"

# ---- Logs ----
LOG_DIR = Path.cwd() / ".hugocheck" / "logs"
