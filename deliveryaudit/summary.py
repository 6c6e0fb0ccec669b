"""
Summary and delivery verdict.

Totals the category tallies, computes the success rate and classifies
the run into one of three verdicts. The verdict depends only on the
number of failed checks.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from deliveryaudit import ux
from deliveryaudit.recorder import ValidationState

# Fixed thresholds, not configurable
READY_MAX_FAILURES = 0
MINOR_MAX_FAILURES = 2


class Verdict(Enum):
    """Delivery readiness tiers."""
    READY = "ready"
    MINOR_FIXES = "minor_fixes"
    MAJOR_ISSUES = "major_issues"

    @property
    def label(self) -> str:
        return {
            Verdict.READY: "READY FOR DELIVERY",
            Verdict.MINOR_FIXES: "MINOR FIXES NEEDED",
            Verdict.MAJOR_ISSUES: "MAJOR ISSUES DETECTED",
        }[self]

    @property
    def icon(self) -> str:
        return {
            Verdict.READY: ux.ICONS["ready"],
            Verdict.MINOR_FIXES: ux.ICONS["minor"],
            Verdict.MAJOR_ISSUES: ux.ICONS["major"],
        }[self]

    @property
    def color(self) -> str:
        return {
            Verdict.READY: "green",
            Verdict.MINOR_FIXES: "yellow",
            Verdict.MAJOR_ISSUES: "red",
        }[self]


@dataclass(frozen=True)
class AuditSummary:
    """Totals and verdict for one audit run."""
    total_passed: int
    total_failed: int
    success_rate: float  # percent, one decimal
    verdict: Verdict

    @property
    def total_checks(self) -> int:
        return self.total_passed + self.total_failed

    @property
    def exit_code(self) -> int:
        return 0 if self.total_failed == 0 else 1


def classify_verdict(total_failed: int) -> Verdict:
    """Map a failure count to a verdict."""
    if total_failed <= READY_MAX_FAILURES:
        return Verdict.READY
    if total_failed <= MINOR_MAX_FAILURES:
        return Verdict.MINOR_FIXES
    return Verdict.MAJOR_ISSUES


def success_rate(passed: int, failed: int) -> float:
    """Percentage of passed checks, rounded to one decimal. 0.0 if none ran."""
    total = passed + failed
    if total == 0:
        return 0.0
    rate = Decimal(passed / total * 100)
    return float(rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def summarize(state: ValidationState) -> AuditSummary:
    """Compute totals, rate and verdict. Does not modify state."""
    passed = state.total_passed
    failed = state.total_failed
    return AuditSummary(
        total_passed=passed,
        total_failed=failed,
        success_rate=success_rate(passed, failed),
        verdict=classify_verdict(failed),
    )


def print_summary(summary: AuditSummary, state: ValidationState) -> None:
    """Print the summary block and, if anything failed, every issue."""
    ux.print_section("📋 VALIDATION SUMMARY")

    ux.print_line()
    ux.print_line("📊 OVERALL RESULTS:", "bold")
    ux.print_stat("Total Checks", summary.total_checks, "blue")
    ux.print_stat("Passed", summary.total_passed, "green")
    ux.print_stat("Failed", summary.total_failed, "red")
    ux.print_stat("Success Rate", f"{summary.success_rate:.1f}%", "yellow")

    verdict = summary.verdict
    ux.print_line()
    ux.print_line(f"🚦 FINAL STATUS: {verdict.icon} {verdict.label}", verdict.color)

    if summary.total_failed > 0:
        ux.print_line()
        ux.print_line(f"{ux.ICONS['minor']} ISSUES TO ADDRESS:", "yellow")
        for category, tally in state.items():
            if not tally.issues:
                continue
            ux.print_line()
            ux.print_line(f"{category.value.upper()}:", "cyan")
            for issue in tally.issues:
                ux.print_line(f"  {ux.ICONS['bullet']} {issue}", "red")
