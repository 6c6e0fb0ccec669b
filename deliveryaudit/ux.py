"""
UX utilities for the delivery audit report.

Provides consistent, optionally colored formatting for the console
report: banners, phase headers, check lines and summary statistics.

Usage:
    from deliveryaudit.ux import print_section, print_check

    print_section("PRE-FLIGHT CHECKS")
    print_check(True, "Playwright config present")
"""

from typing import Optional
import sys


# =============================================================================
# Status Icons
# =============================================================================

ICONS = {
    "pass": "✓",
    "fail": "✗",
    "warning": "⚠",
    "bullet": "-",
    "ready": "✅",
    "minor": "⚠️",
    "major": "❌",
}

# ANSI color codes (optional, can be disabled)
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
}

RULE = "=" * 32

# Global flag for color support
_use_colors = sys.stdout.isatty()


def set_colors(enabled: bool) -> None:
    """Enable or disable color output."""
    global _use_colors
    _use_colors = enabled


def colors_enabled() -> bool:
    return _use_colors


def _color(text: str, color: str) -> str:
    """Apply color if colors are enabled."""
    if _use_colors and color in COLORS:
        return f"{COLORS[color]}{text}{COLORS['reset']}"
    return text


# =============================================================================
# Message Formatting
# =============================================================================

def format_check(passed: bool, message: str) -> str:
    """Format a single check line with its pass/fail icon."""
    if passed:
        return _color(f"  {ICONS['pass']} {message}", "green")
    return _color(f"  {ICONS['fail']} {message}", "red")


def print_check(passed: bool, message: str) -> None:
    """Print a single check line."""
    print(format_check(passed, message))


def print_action(message: str) -> None:
    """Print an in-progress action, e.g. a command about to run."""
    print(_color(f"  {message}", "yellow"))


def print_error(message: str, file=None) -> None:
    """Print an error message (default: stderr)."""
    print(_color(message, "red"), file=file or sys.stderr)


def print_line(message: str = "", color: Optional[str] = None) -> None:
    """Print a plain line, optionally colored."""
    print(_color(message, color) if color else message)


# =============================================================================
# Headers and Sections
# =============================================================================

def print_banner(title: str, subtitle: str = "") -> None:
    """Print the report banner."""
    print(_color(title, "bold"))
    print(_color(RULE, "blue"))
    if subtitle:
        print(_color(subtitle, "cyan"))
    print()


def print_section(title: str) -> None:
    """Print a phase section header."""
    print()
    print(_color(title, "bold"))
    print(_color(RULE, "blue"))


def print_subheader(title: str) -> None:
    """Print a subsection header within a phase."""
    print()
    print(_color(title, "cyan"))


def print_stat(label: str, value, color: str = "blue") -> None:
    """Print an indented summary statistic."""
    print(_color(f"   {label}: {value}", color))
