"""
Tests for the code-quality scan.

- Detectors: console statements, hardcoded credentials, error handling
- Walker: skip rules, extension filter, ordering, unreadable files
- Tree scan: detectors composed over a directory
"""

import inspect
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from deliveryaudit.quality import (
    ErrorHandlingTally,
    Finding,
    classify_error_handling,
    find_console_statements,
    find_hardcoded_credentials,
    run_quality_scan,
    scan,
    walk_tree,
)
from deliveryaudit.quality.detectors import GOOD, NEEDS_IMPROVEMENT


def write(root: Path, rel: str, content: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestConsoleStatements:
    """Tests for find_console_statements."""

    def test_flags_code_line_not_comment(self):
        """Should flag line 3 but not the commented line 5."""
        content = "import x from 'x';\n\nconsole.log(x)\nconst y = 1;\n// console.log(y)\n"
        findings = find_console_statements(content, "path")
        assert [f.location for f in findings] == ["path:3"]

    def test_indented_comment_ignored(self):
        """Should treat indented // lines as comments."""
        content = "function f() {\n    // console.log('debug')\n}\n"
        assert find_console_statements(content, "a.ts") == []

    def test_trailing_comment_still_flagged(self):
        """Should flag code lines even if console.log sits in a trailing comment."""
        content = "run(); // console.log(state)\n"
        assert [f.line_number for f in find_console_statements(content, "a.ts")] == [1]

    def test_multiple_lines_in_order(self):
        """Should return one finding per line, in order."""
        content = "console.log(1)\nfoo()\n  console.log(2)\n"
        findings = find_console_statements(content, "a.js")
        assert [f.line_number for f in findings] == [1, 3]
        assert all(f.detector == "console_statement" for f in findings)

    def test_other_console_methods_ignored(self):
        """Should only look for console.log."""
        assert find_console_statements("console.error('x')\n", "a.ts") == []


class TestHardcodedCredentials:
    """Tests for find_hardcoded_credentials."""

    def test_password_literal(self):
        """Should flag a quoted password assignment."""
        findings = find_hardcoded_credentials('const password = "abc123"\n', "login.ts")
        assert len(findings) >= 1
        assert findings[0].path == "login.ts"
        assert findings[0].detector == "password"

    def test_clean_file(self):
        """Should find nothing without literal assignments."""
        content = "const password = process.env.PASSWORD;\nconst user = 'bob';\n"
        assert find_hardcoded_credentials(content, "login.ts") == []

    @pytest.mark.parametrize("line", [
        "apiKey = 'k-123'",
        "const API_KEY=\"k-123\"",
        "let api-key = 'k'",
        "authToken = 'abc'",
        "PASSWORD = 'hunter2'",
    ])
    def test_variants(self, line):
        """Should match case-insensitively and with key separators."""
        assert find_hardcoded_credentials(line, "a.ts")

    def test_object_property_not_matched(self):
        """Should not flag `key: value` properties."""
        assert find_hardcoded_credentials("const c = { password: 'x' };", "a.ts") == []

    def test_empty_literal_not_matched(self):
        """Should require a non-empty literal."""
        assert find_hardcoded_credentials("password = ''", "a.ts") == []

    def test_one_finding_per_matching_pattern(self):
        """A file matching two patterns should be reported twice."""
        content = "password = 'a'\n\nconst token = 'b'\n"
        findings = find_hardcoded_credentials(content, "a.ts")
        assert [f.detector for f in findings] == ["password", "token"]
        assert [f.line_number for f in findings] == [1, 3]


class TestErrorHandling:
    """Tests for classify_error_handling and ErrorHandlingTally."""

    def test_try_catch_is_good(self):
        content = "try { await page.goto(url) } catch (e) { throw e }"
        assert classify_error_handling(content) == GOOD

    def test_await_without_try_needs_improvement(self):
        assert classify_error_handling("await page.click('#go')") == NEEDS_IMPROVEMENT

    def test_promise_without_try_needs_improvement(self):
        assert classify_error_handling("return new Promise(r => r())") == NEEDS_IMPROVEMENT

    def test_plain_file_uncounted(self):
        assert classify_error_handling("export const x = 1;") is None

    def test_substring_markers(self):
        """Markers match inside other words; retry + catch counts as good."""
        assert classify_error_handling("retry(); promise.catch(noop)") == GOOD

    def test_tally_count(self):
        tally = ErrorHandlingTally()
        for c in (GOOD, NEEDS_IMPROVEMENT, None, GOOD):
            tally.count(c)
        assert tally == ErrorHandlingTally(good=2, needs_improvement=1)

    def test_tally_merge_and_add(self):
        a = ErrorHandlingTally(good=1, needs_improvement=2)
        b = ErrorHandlingTally(good=3, needs_improvement=0)
        assert a + b == ErrorHandlingTally(good=4, needs_improvement=2)
        a.merge(b)
        assert a == ErrorHandlingTally(good=4, needs_improvement=2)


class TestFinding:
    """Tests for Finding.location."""

    def test_line_location(self):
        assert Finding(path="a.ts", detector="x", line_number=7).location == "a.ts:7"

    def test_file_location(self):
        assert Finding(path="a.ts", detector="x").location == "a.ts"


class TestWalker:
    """Tests for walk_tree and scan."""

    def test_skips_hidden_and_dependency_dirs(self, tmp_path):
        """Should never descend into .hidden or node_modules."""
        write(tmp_path, "src/a.ts", "a")
        write(tmp_path, ".cache/b.ts", "b")
        write(tmp_path, "node_modules/lib/c.js", "c")
        write(tmp_path, "src/node_modules/d.js", "d")
        write(tmp_path, "src/.git/e.js", "e")

        paths = [p for p, _ in walk_tree(str(tmp_path))]
        assert paths == [os.path.join(str(tmp_path), "src", "a.ts")]

    def test_extension_filter(self, tmp_path):
        """Should only visit allowed extensions."""
        write(tmp_path, "a.ts", "")
        write(tmp_path, "b.js", "")
        write(tmp_path, "c.tsx", "")
        write(tmp_path, "d.py", "")

        names = [os.path.basename(p) for p, _ in walk_tree(str(tmp_path))]
        assert names == ["a.ts", "b.js"]

    def test_hidden_files_are_visited(self, tmp_path):
        """Skip rules apply to directories, not files."""
        write(tmp_path, ".eslintrc.js", "module.exports = {}")
        names = [os.path.basename(p) for p, _ in walk_tree(str(tmp_path))]
        assert names == [".eslintrc.js"]

    def test_deterministic_depth_first_order(self, tmp_path):
        """Should visit entries in name order, depth-first."""
        write(tmp_path, "b.ts", "")
        write(tmp_path, "a/z.ts", "")
        write(tmp_path, "a/y.ts", "")
        write(tmp_path, "c.ts", "")

        rel = [os.path.relpath(p, str(tmp_path)) for p, _ in walk_tree(str(tmp_path))]
        assert rel == [os.path.join("a", "y.ts"), os.path.join("a", "z.ts"), "b.ts", "c.ts"]

    def test_yields_content(self, tmp_path):
        write(tmp_path, "a.ts", "hello")
        assert list(walk_tree(str(tmp_path))) == [(os.path.join(str(tmp_path), "a.ts"), "hello")]

    def test_is_lazy(self, tmp_path):
        """Should return a generator."""
        assert inspect.isgenerator(walk_tree(str(tmp_path)))

    def test_custom_predicates(self, tmp_path):
        write(tmp_path, "keep/a.py", "")
        write(tmp_path, "drop/b.py", "")
        paths = [
            os.path.relpath(p, str(tmp_path))
            for p, _ in walk_tree(
                str(tmp_path),
                skip_dir=lambda name: name == "drop",
                visit_file=lambda name: name.endswith(".py"),
            )
        ]
        assert paths == [os.path.join("keep", "a.py")]

    def test_unreadable_file_skipped(self, tmp_path):
        """Should skip a file that cannot be read and keep going."""
        write(tmp_path, "a.ts", "a")
        bad = write(tmp_path, "b.ts", "b")
        write(tmp_path, "c.ts", "c")

        from deliveryaudit.quality import walker
        real_read = walker.read_source

        def flaky_read(path):
            if path == str(bad):
                raise PermissionError("denied")
            return real_read(path)

        with patch("deliveryaudit.quality.walker.read_source", side_effect=flaky_read):
            contents = [c for _, c in walk_tree(str(tmp_path))]

        assert contents == ["a", "c"]

    def test_scan_visits_each_file(self, tmp_path):
        write(tmp_path, "a.ts", "1")
        write(tmp_path, "sub/b.js", "2")
        seen = []

        summary = scan(str(tmp_path), (".ts", ".js"), lambda p, c: seen.append(c))

        assert seen == ["1", "2"]
        assert summary.root_found is True
        assert summary.files_visited == 2

    def test_scan_missing_root(self, tmp_path):
        """Should report a missing root instead of an indistinguishable empty scan."""
        seen = []
        summary = scan(str(tmp_path / "nope"), (".ts",), lambda p, c: seen.append(p))

        assert seen == []
        assert summary.root_found is False
        assert summary.files_visited == 0

    def test_scan_empty_root(self, tmp_path):
        summary = scan(str(tmp_path), (".ts",), lambda p, c: None)
        assert summary.root_found is True
        assert summary.files_visited == 0

    def test_package_exports_scan_function(self):
        """The package-level scan name should be the walker function, not a module."""
        import deliveryaudit.quality as quality
        from deliveryaudit.quality import walker

        assert inspect.isfunction(quality.scan)
        assert quality.scan is walker.scan


class TestRunQualityScan:
    """Tests for run_quality_scan."""

    def test_combined_results(self, tmp_path):
        """Should apply all detectors over the tree."""
        a = write(tmp_path, "tests/a.spec.ts", "try { await x() } catch (e) {}\nconsole.log(1)\n")
        b = write(tmp_path, "pages/b.ts", "const password = 'p'\nawait page.fill('#p', password)\n")
        write(tmp_path, "pages/c.ts", "export const url = '/';\n")
        write(tmp_path, "node_modules/x/index.js", "console.log('vendored'); token = 'z'")

        report = run_quality_scan(str(tmp_path))

        assert report.summary.files_visited == 3
        assert report.console_locations == [f"{a}:2"]
        assert report.credential_paths == [str(b)]
        assert report.error_handling == ErrorHandlingTally(good=1, needs_improvement=1)

    def test_double_count_by_default(self, tmp_path):
        """A file matching two credential patterns is listed twice."""
        f = write(tmp_path, "a.ts", "password = 'a'\ntoken = 'b'\n")
        report = run_quality_scan(str(tmp_path))
        assert report.credential_paths == [str(f), str(f)]

    def test_dedupe_credentials(self, tmp_path):
        """Should list each file once when deduping."""
        f = write(tmp_path, "a.ts", "password = 'a'\ntoken = 'b'\n")
        report = run_quality_scan(str(tmp_path), dedupe_credentials=True)
        assert report.credential_paths == [str(f)]

    def test_custom_extensions(self, tmp_path):
        write(tmp_path, "a.py", "console.log")
        write(tmp_path, "b.ts", "console.log")
        report = run_quality_scan(str(tmp_path), [".py"])
        assert len(report.console_statements) == 1
        assert report.console_statements[0].path.endswith("a.py")

    def test_missing_root(self, tmp_path):
        """Should produce no findings and flag the missing root."""
        report = run_quality_scan(str(tmp_path / "ui-tests"))
        assert report.summary.root_found is False
        assert report.console_locations == []
        assert report.credential_paths == []
        assert report.error_handling == ErrorHandlingTally()
