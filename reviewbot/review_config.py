"""Review configuration loaded from reviewbot.yaml.

Example:

    size:
      thresholds:
        XS: 50
        S: 200
        M: 500
        L: 1000
    review:
      max_line_length: 120
      ignore_patterns:
        - "docs/*"
      include_default_generated: true

Files matching ignore or generated patterns are not scanned.
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_CANDIDATES = [
    "reviewbot.yaml",
    ".reviewbot.yaml",
    "reviewbot.yml",
    ".reviewbot.yml",
    ".github/reviewbot.yaml",
]

# Upper bounds (exclusive) on added + deleted lines; anything above L is XL
DEFAULT_SIZE_THRESHOLDS = {"XS": 50, "S": 200, "M": 500, "L": 1000}

DEFAULT_MAX_LINE_LENGTH = 120

DEFAULT_GENERATED_PATTERNS = [
    # Generated code directories
    "*/gen/*",
    "*/generated/*",
    "*/__generated__/*",
    # Protobuf
    "*.pb.go",
    "*.pb.ts",
    "*.pb.js",
    "*.pb.py",
    "*_pb2.py",
    "*_pb2_grpc.py",
    # Lock files
    "*.lock",
    "package-lock.json",
    "pnpm-lock.yaml",
    "yarn.lock",
    "go.sum",
    # Snapshots
    "*.snap",
    "*/__snapshots__/*",
    # Minified
    "*.min.js",
    "*.min.css",
    "*.bundle.js",
]


@dataclass
class ReviewConfig:
    """Configuration for sizing and diff review."""

    size_thresholds: dict[str, int] = field(default_factory=lambda: DEFAULT_SIZE_THRESHOLDS.copy())
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    ignore_patterns: list[str] = field(default_factory=list)
    generated_patterns: list[str] = field(default_factory=lambda: DEFAULT_GENERATED_PATTERNS.copy())
    include_default_generated: bool = True  # Set False to only use ignore_patterns

    @classmethod
    def load(cls, path: Path | str | None = None) -> ReviewConfig:
        """Load config from YAML file or return defaults."""
        if path is None:
            for candidate in CONFIG_CANDIDATES:
                if Path(candidate).exists():
                    path = candidate
                    break

        if path is None or not Path(path).exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewConfig:
        """Create config from dictionary (e.g., parsed YAML)."""
        size_data = data.get("size", {}) or {}
        review_data = data.get("review", {}) or {}

        thresholds = DEFAULT_SIZE_THRESHOLDS.copy()
        for label, limit in (size_data.get("thresholds") or {}).items():
            if label not in thresholds:
                raise ValueError(f"Unknown size label in config: {label}")
            thresholds[label] = int(limit)

        limits = [thresholds[label] for label in DEFAULT_SIZE_THRESHOLDS]
        if limits != sorted(limits):
            raise ValueError(f"Size thresholds must increase from XS to L: {thresholds}")

        include_default_generated = review_data.get("include_default_generated", True)

        return cls(
            size_thresholds=thresholds,
            max_line_length=int(review_data.get("max_line_length", DEFAULT_MAX_LINE_LENGTH)),
            ignore_patterns=list(review_data.get("ignore_patterns", [])),
            generated_patterns=DEFAULT_GENERATED_PATTERNS.copy() if include_default_generated else [],
            include_default_generated=include_default_generated,
        )

    def is_ignored(self, filepath: str) -> bool:
        """Check if filepath matches a generated or ignored pattern.

        Patterns containing "/" match the whole path; others match the
        filename only.
        """
        if not filepath:
            return False

        filename = filepath.split("/")[-1]

        for pattern in self.generated_patterns + self.ignore_patterns:
            if "/" in pattern:
                if fnmatch.fnmatch(filepath, pattern):
                    return True
            elif fnmatch.fnmatch(filename, pattern):
                return True

        return False

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data: dict[str, Any] = {
            "size": {"thresholds": self.size_thresholds},
            "review": {
                "max_line_length": self.max_line_length,
                "ignore_patterns": self.ignore_patterns,
            },
        }
        if not self.include_default_generated:
            data["review"]["include_default_generated"] = False

        return yaml.dump(data, default_flow_style=False, sort_keys=False)
