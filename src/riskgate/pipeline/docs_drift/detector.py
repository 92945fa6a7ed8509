"""Docs drift detector.

Flags changes to source files (tier 2 and 3) that arrive without any
documentation change. Under ``relaxed`` the check does not run, under
``standard`` it only warns, and under ``strict`` a detection fails the gate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from riskgate import ui
from riskgate.pipeline.classify.types import ClassificationResult
from riskgate.pipeline.config.types import DocsDriftConfig
from riskgate.utils.globmatch import matches_any

DRIFT_WARNING = (
    "Source files changed without documentation updates. "
    "Consider updating README.md or relevant docs."
)


class Strictness(str, Enum):
    """How seriously docs drift is treated."""

    RELAXED = "relaxed"
    STANDARD = "standard"
    STRICT = "strict"

    @classmethod
    def parse(cls, value: str | Strictness | None) -> Strictness:
        """Parse a strictness value; blank means relaxed, unknown means standard."""
        if isinstance(value, Strictness):
            return value
        normalized = (value or "").strip().lower()
        if not normalized:
            return cls.RELAXED
        try:
            return cls(normalized)
        except ValueError:
            ui.warning(f"Unknown strictness '{value}'; treating as '{cls.STANDARD.value}'")
            return cls.STANDARD


@dataclass(frozen=True)
class DocsDriftResult:
    """Docs drift outcome. ``enforced`` means the gate must fail."""

    detected: bool = False
    warning: str = ""
    enforced: bool = False

    def to_dict(self) -> dict[str, object]:
        return {"detected": self.detected, "warning": self.warning}


def is_doc_file(path: str, tracked_docs: tuple[str, ...] = ()) -> bool:
    """Return True for markdown files, files under docs/ and tracked docs."""
    return path.endswith(".md") or path.startswith("docs/") or matches_any(path, tracked_docs)


def check_docs_drift(
    strictness: Strictness | str,
    classification: ClassificationResult,
    config: DocsDriftConfig | None = None,
) -> DocsDriftResult:
    """Check whether source changes came with documentation changes."""
    config = config or DocsDriftConfig()
    level = Strictness.parse(strictness)

    if level is Strictness.RELAXED:
        ui.ok("Docs drift check skipped (strictness=relaxed)")
        return DocsDriftResult()

    if level is Strictness.STANDARD and config.require_update_with_code_change:
        level = Strictness.STRICT

    source_files = [
        path
        for path in (*classification.tier2_files, *classification.tier3_files)
        if not matches_any(path, config.exempt_patterns)
    ]
    if not source_files:
        ui.ok("No source files changed — docs drift N/A")
        return DocsDriftResult()

    if any(is_doc_file(path, config.tracked_docs) for path in classification.tier1_files):
        ui.ok("Documentation updated alongside source changes")
        return DocsDriftResult()

    if level is Strictness.STRICT:
        return DocsDriftResult(detected=True, warning=DRIFT_WARNING, enforced=True)

    ui.warning(f"Docs drift: {DRIFT_WARNING}")
    return DocsDriftResult(detected=True, warning=DRIFT_WARNING)
