"""Change classification types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ClassificationReason = Literal["classified", "no-changes", "no-merge-base", "diff-failed"]


@dataclass(frozen=True)
class ClassificationResult:
    """Changed files split into risk tiers.

    Every classified path appears in exactly one tier tuple. ``max_tier`` is
    the highest tier holding a file, 1 when nothing changed, and 3 when the
    diff could not be computed at all.
    """

    tier1_files: tuple[str, ...] = ()
    tier2_files: tuple[str, ...] = ()
    tier3_files: tuple[str, ...] = ()
    max_tier: int = 1
    reason: ClassificationReason = "classified"

    @property
    def total(self) -> int:
        return len(self.tier1_files) + len(self.tier2_files) + len(self.tier3_files)

    def changed_files_dict(self) -> dict[str, list[str]]:
        return {
            "tier1": list(self.tier1_files),
            "tier2": list(self.tier2_files),
            "tier3": list(self.tier3_files),
        }
