"""Constants for generator invocation and failure classification."""

from __future__ import annotations

import re

# Parser failures name the descriptor, then a line and a column somewhere after it.
DESCRIPTOR_PARSE_ERROR_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<source>[^\s,:'\"]+\.pdsc)\b.*?line:?\s*(?P<line>\d+)\D{1,12}?column:?\s*(?P<column>\d+)",
    re.IGNORECASE | re.DOTALL,
)

GENERATOR_MODIFIED_FILES_KEY: str = "modifiedFiles"
GENERATOR_TARGET_FILES_KEY: str = "targetFiles"

COMMAND_PLACEHOLDERS: frozenset[str] = frozenset(
    {"api_name", "output_dir", "resolver_path", "classpath", "source_paths", "packages"}
)
DEFAULT_COMMAND_TIMEOUT_SECONDS: int = 600

# Only the names above are substituted; any other braces in argv are literal.
COMMAND_PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(
    r"\{(" + "|".join(sorted(COMMAND_PLACEHOLDERS)) + r")\}"
)
# Brace-wrapped identifiers, checked against the placeholder names for typos.
BRACED_IDENTIFIER_PATTERN: re.Pattern[str] = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
PLACEHOLDER_TYPO_CUTOFF: float = 0.7
