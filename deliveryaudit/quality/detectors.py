"""
Code-quality detectors.

Each detector is a pure function over one file's text. They are plain
substring and regex matchers, not parsers.

Known limitations:
- comment_blind_spots: only lines whose trimmed text starts with `//` count
  as comments for the console detector. Block comments, trailing comments
  and string literals containing `console.log` are still flagged.
- credential_per_pattern: a file matching several credential patterns yields
  one finding per pattern, so the file is counted more than once.
- credential_literals_only: only `name = "literal"` assignments are caught.
  Object properties (`password: "x"`) and template literals are not.
- marker_substrings: error-handling classification looks for `try`, `catch`,
  `await` and `Promise` anywhere in the file, including inside other words
  ("retry", "entry"), comments and strings. The result is per file, not
  per function.
"""

from dataclasses import dataclass
from typing import List, Optional
import re

CONSOLE_MARKER = "console.log"
COMMENT_MARKER = "//"

# Pattern definitions: (name, regex) tested against the whole file
CREDENTIAL_PATTERN_DEFS = [
    ("password", re.compile(r"password\s*=\s*['\"][^'\"]+['\"]", re.IGNORECASE)),
    ("api_key", re.compile(r"api[_-]?key\s*=\s*['\"][^'\"]+['\"]", re.IGNORECASE)),
    ("token", re.compile(r"token\s*=\s*['\"][^'\"]+['\"]", re.IGNORECASE)),
]

TRY_MARKER = "try"
CATCH_MARKER = "catch"
ASYNC_MARKERS = ("await", "Promise")

GOOD = "good"
NEEDS_IMPROVEMENT = "needs_improvement"


@dataclass
class Finding:
    """A detector hit in one file."""
    path: str
    detector: str
    line_number: Optional[int] = None  # 1-based

    @property
    def location(self) -> str:
        if self.line_number is None:
            return self.path
        return f"{self.path}:{self.line_number}"


@dataclass
class ErrorHandlingTally:
    """Files with and without try/catch around async code."""
    good: int = 0
    needs_improvement: int = 0

    def count(self, classification: Optional[str]) -> None:
        if classification == GOOD:
            self.good += 1
        elif classification == NEEDS_IMPROVEMENT:
            self.needs_improvement += 1

    def merge(self, other: "ErrorHandlingTally") -> None:
        """Add another tally's counts into this one."""
        self.good += other.good
        self.needs_improvement += other.needs_improvement

    def __add__(self, other: "ErrorHandlingTally") -> "ErrorHandlingTally":
        return ErrorHandlingTally(
            good=self.good + other.good,
            needs_improvement=self.needs_improvement + other.needs_improvement,
        )


def find_console_statements(content: str, path: str = "") -> List[Finding]:
    """Find console.log calls that are not on a `//` comment line.

    Args:
        content: File content
        path: File path recorded on each finding

    Returns:
        One Finding per offending line, in line order
    """
    findings = []
    for i, line in enumerate(content.split("\n"), 1):
        if CONSOLE_MARKER in line and not line.strip().startswith(COMMENT_MARKER):
            findings.append(Finding(path=path, detector="console_statement", line_number=i))
    return findings


def find_hardcoded_credentials(content: str, path: str = "") -> List[Finding]:
    """Find quoted-literal assignments to password, API key or token names.

    One finding per matching pattern (see credential_per_pattern above);
    the line number is that of the pattern's first match.
    """
    findings = []
    for name, pattern in CREDENTIAL_PATTERN_DEFS:
        match = pattern.search(content)
        if match:
            line_num = content[:match.start()].count("\n") + 1
            findings.append(Finding(path=path, detector=name, line_number=line_num))
    return findings


def classify_error_handling(content: str) -> Optional[str]:
    """Classify a file's error handling.

    Returns:
        GOOD if it has both try and catch markers, NEEDS_IMPROVEMENT if
        it has async markers without them, otherwise None (not counted)
    """
    if TRY_MARKER in content and CATCH_MARKER in content:
        return GOOD
    if any(marker in content for marker in ASYNC_MARKERS):
        return NEEDS_IMPROVEMENT
    return None
