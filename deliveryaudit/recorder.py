"""
Check recording and per-phase tallies.

Every audit check is a named boolean. The CheckRecorder counts it against
one of the four phase categories, keeps the failure messages in order and
prints a ✓/✗ line for it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from deliveryaudit import ux


class Category(str, Enum):
    """Audit phase a check belongs to. Definition order is report order."""
    PREFLIGHT = "preflight"
    TESTS = "tests"
    QUALITY = "quality"
    REPORTS = "reports"


@dataclass
class CategoryTally:
    """Running pass/fail counters and issue list for one category."""
    passed: int = 0
    failed: int = 0
    issues: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed


class ValidationState:
    """One CategoryTally per Category, for the lifetime of an audit run."""

    def __init__(self):
        self._tallies: Dict[Category, CategoryTally] = {
            category: CategoryTally() for category in Category
        }

    def __getitem__(self, category) -> CategoryTally:
        return self._tallies[Category(category)]

    def items(self) -> Iterator[Tuple[Category, CategoryTally]]:
        """Iterate (category, tally) pairs in report order."""
        for category in Category:
            yield category, self._tallies[category]

    @property
    def total_passed(self) -> int:
        return sum(t.passed for t in self._tallies.values())

    @property
    def total_failed(self) -> int:
        return sum(t.failed for t in self._tallies.values())


class CheckRecorder:
    """Records checks into a ValidationState."""

    def __init__(self, state: Optional[ValidationState] = None, echo: bool = True):
        self.state = state if state is not None else ValidationState()
        self.echo = echo

    def record(self, condition: bool, message: str, category=Category.PREFLIGHT) -> None:
        """Record one check.

        Args:
            condition: True if the check passed
            message: Human-readable description; kept as an issue on failure
            category: Category (or its string value) to count against
        """
        tally = self.state[category]

        if condition:
            tally.passed += 1
        else:
            tally.failed += 1
            tally.issues.append(message)

        if self.echo:
            ux.print_check(bool(condition), message)
