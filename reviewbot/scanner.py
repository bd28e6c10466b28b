"""Line-oriented diff scanner.

Checks each added line of a unified diff against a fixed table of
textual patterns and turns hits into inline review comments.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .models import DiffComment, FileChange, Issue, Severity
from .review_config import DEFAULT_MAX_LINE_LENGTH, ReviewConfig

logger = logging.getLogger(__name__)

_HUNK_START = re.compile(r"\+(\d+)")


@dataclass(frozen=True)
class IssueRule:
    """One pattern check applied to a line of added code."""

    name: str
    severity: Severity
    message: str  # may reference {max_line_length}
    check: Callable[[str, str, int], bool]  # (code, filename, max_line_length)
    extensions: tuple[str, ...] = ()  # empty means all files

    def applies_to(self, filename: str) -> bool:
        return not self.extensions or filename.endswith(self.extensions)


def _search(*patterns: str, flags: int = 0) -> Callable[[str, str, int], bool]:
    compiled = [re.compile(p, flags) for p in patterns]
    return lambda code, filename, max_line_length: any(p.search(code) for p in compiled)


def _console_log(code: str, filename: str, max_line_length: int) -> bool:
    # Test and spec files may log freely
    return "console.log" in code and "test" not in filename and "spec" not in filename


def _long_line(code: str, filename: str, max_line_length: int) -> bool:
    return len(code.strip()) > max_line_length


def _deep_nesting(code: str, filename: str, max_line_length: int) -> bool:
    return len(re.findall(r"\bif\s*\(", code)) >= 3


JAVA = (".java",)
JS_TS = (".js", ".ts")

ISSUE_RULES = (
    IssueRule(
        "hardcoded_credentials",
        "high",
        "🔒 **Security Issue**: Possible hardcoded credentials detected. "
        "Please use environment variables or a secure vault for sensitive data.",
        _search(
            r"""password\s*=\s*["'][^"']+["']""",
            r"""api[_-]?key\s*=\s*["'][^"']+["']""",
            r"""secret\s*=\s*["'][^"']+["']""",
            flags=re.IGNORECASE,
        ),
    ),
    IssueRule(
        "stdout_logging",
        "medium",
        "📝 **Best Practice**: Consider using a proper logging framework (e.g., SLF4J) "
        "instead of `System.out.println`.",
        _search(r"System\.out\.print"),
        JAVA,
    ),
    IssueRule(
        "empty_catch",
        "high",
        "⚠️ **Code Quality**: Empty catch block detected. "
        "Either handle the exception or log it appropriately.",
        _search(r"catch\s*\([^)]+\)\s*\{\s*\}"),
        JAVA,
    ),
    IssueRule(
        "sql_injection",
        "high",
        "🔒 **Security Issue**: Potential SQL injection vulnerability. "
        "Use parameterized queries or prepared statements.",
        _search(r"""executeQuery\s*\(\s*["'].*\+""", r"""prepareStatement\s*\(\s*["'].*\+"""),
        JAVA,
    ),
    IssueRule(
        "console_log",
        "low",
        "📝 **Code Quality**: `console.log` statement found. "
        "Consider using a proper logging library or remove before production.",
        _console_log,
        JS_TS,
    ),
    IssueRule(
        "loose_equality",
        "medium",
        "📝 **Best Practice**: Use strict equality (`===`) instead of loose equality (`==`) "
        "to avoid type coercion issues.",
        _search(r"[^=!]==[^=]"),
        JS_TS,
    ),
    IssueRule(
        "var_declaration",
        "low",
        "📝 **Best Practice**: Use `let` or `const` instead of `var` for better scoping.",
        _search(r"\bvar\s+\w+"),
        JS_TS,
    ),
    IssueRule(
        "todo_comment",
        "low",
        "📌 **Note**: TODO comment found. Consider creating a tracked issue for this work.",
        _search(r"//\s*TODO", r"/\*\s*TODO", r"#\s*TODO", flags=re.IGNORECASE),
    ),
    IssueRule(
        "long_line",
        "low",
        "📏 **Code Style**: Line is very long (>{max_line_length} characters). "
        "Consider breaking it up for better readability.",
        _long_line,
    ),
    IssueRule(
        "deep_nesting",
        "medium",
        "🔄 **Complexity**: High nesting level detected. "
        "Consider refactoring to reduce complexity.",
        _deep_nesting,
    ),
)


def check_for_issues(
    code: str,
    filename: str,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> list[Issue]:
    """Check one line of added code. Issues come back in rule order."""
    return [
        Issue(
            rule=rule.name,
            severity=rule.severity,
            message=rule.message.format(max_line_length=max_line_length),
        )
        for rule in ISSUE_RULES
        if rule.applies_to(filename) and rule.check(code, filename, max_line_length)
    ]


def analyze_patch(
    filename: str,
    patch: str | None,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> list[DiffComment]:
    """Turn issues on added lines of a unified diff into review comments.

    `position` is the 1-based line index within the patch (what the
    review API expects); `line` is the line number in the new file.
    """
    comments: list[DiffComment] = []

    if not patch:
        return comments

    current_line = 0

    for index, line in enumerate(patch.split("\n")):
        position = index + 1

        if line.startswith("@@"):
            match = _HUNK_START.search(line)
            if match:
                current_line = int(match.group(1)) - 1
            continue

        if line.startswith("-"):
            continue

        if line.startswith("+"):
            current_line += 1
            for issue in check_for_issues(line[1:], filename, max_line_length):
                comments.append(
                    DiffComment(
                        path=filename,
                        position=position,
                        line=current_line,
                        body=issue.message,
                        severity=issue.severity,
                    )
                )
        elif not line.startswith("\\"):
            current_line += 1

    return comments


def scan_files(files: Iterable[FileChange], config: ReviewConfig | None = None) -> list[DiffComment]:
    """Scan every reviewable file in a PR."""
    config = config or ReviewConfig()
    comments: list[DiffComment] = []

    for file in files:
        if file.status == "removed":
            continue
        if config.is_ignored(file.filename):
            logger.info(f"Skipping ignored file: {file.filename}")
            continue

        logger.info(f"Analyzing file: {file.filename}")
        comments.extend(analyze_patch(file.filename, file.patch, config.max_line_length))

    return comments
