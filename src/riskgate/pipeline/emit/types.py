"""Gate result record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from riskgate.pipeline.checks.resolver import RequiredChecks
from riskgate.pipeline.classify.types import ClassificationResult
from riskgate.pipeline.config.types import TIER_NAMES, TierName
from riskgate.pipeline.docs_drift.detector import DocsDriftResult
from riskgate.pipeline.review.status import ReviewStatus


@dataclass(frozen=True)
class GateResult:
    """Terminal, immutable outcome of one gate run."""

    sha: str
    tier: int
    tier_name: TierName
    required_checks: tuple[str, ...]
    tier1_files: tuple[str, ...]
    tier2_files: tuple[str, ...]
    tier3_files: tuple[str, ...]
    docs_drift: DocsDriftResult
    review_agent_status: ReviewStatus

    @classmethod
    def assemble(
        cls,
        *,
        sha: str,
        classification: ClassificationResult,
        checks: RequiredChecks,
        docs_drift: DocsDriftResult,
        review_agent_status: ReviewStatus,
    ) -> GateResult:
        """Build the result from stage outputs. The tier is the one checks were resolved for."""
        return cls(
            sha=sha,
            tier=checks.tier,
            tier_name=TIER_NAMES.get(checks.tier, "high"),
            required_checks=checks.checks,
            tier1_files=classification.tier1_files,
            tier2_files=classification.tier2_files,
            tier3_files=classification.tier3_files,
            docs_drift=docs_drift,
            review_agent_status=review_agent_status,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the key names downstream workflows read."""
        return {
            "sha": self.sha,
            "tier": self.tier,
            "tierName": self.tier_name,
            "requiredChecks": list(self.required_checks),
            "changedFiles": {
                "tier1": list(self.tier1_files),
                "tier2": list(self.tier2_files),
                "tier3": list(self.tier3_files),
            },
            "docsDrift": self.docs_drift.to_dict(),
            "reviewAgentStatus": self.review_agent_status.value,
        }
