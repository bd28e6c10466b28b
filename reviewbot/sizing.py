"""PR size labels and the summary comment."""

from __future__ import annotations

from dataclasses import dataclass

from .review_config import DEFAULT_SIZE_THRESHOLDS

SIZE_COMMENTS = {
    "XS": "✅ This is a very small PR. Great for quick reviews!",
    "S": "✅ This is a small PR. Should be easy to review.",
    "M": "⚠️ This is a medium-sized PR. Consider breaking it into smaller PRs.",
    "L": "⚠️ This is a large PR. Please consider breaking it into smaller, focused PRs.",
    "XL": "🚨 This is a very large PR. Please break it into smaller PRs.",
}


@dataclass(frozen=True)
class SizeAssessment:
    size: str  # XS, S, M, L or XL
    comment: str
    total_changes: int

    @property
    def label(self) -> str:
        return f"size/{self.size}"


def assess_size(
    additions: int,
    deletions: int,
    thresholds: dict[str, int] | None = None,
) -> SizeAssessment:
    """Bucket a PR by total changed lines.

    Thresholds are exclusive upper bounds for XS, S, M and L, checked in
    that order; anything larger is XL.
    """
    thresholds = thresholds or DEFAULT_SIZE_THRESHOLDS
    total = additions + deletions

    size = "XL"
    for name in ("XS", "S", "M", "L"):
        if total < thresholds[name]:
            size = name
            break

    return SizeAssessment(size=size, comment=SIZE_COMMENTS[size], total_changes=total)


def render_summary(files_count: int, additions: int, deletions: int, size_comment: str) -> str:
    """Markdown for the PR summary comment."""
    return f"""## 🤖 Automated PR Review

### PR Statistics
- **Files changed:** {files_count}
- **Lines added:** +{additions}
- **Lines deleted:** -{deletions}
- **Total changes:** {additions + deletions}

### Size Assessment
{size_comment}

### Checklist
- [ ] Code follows the project's coding standards
- [ ] Tests have been added/updated
- [ ] Documentation updated (if needed)
- [ ] All CI checks pass
- [ ] PR reviewed by a team member

---
*This is an automated review. Please reach out to maintainers if you have questions.*"""
