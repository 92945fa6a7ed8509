"""Risk tier configuration types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

TierName = Literal["low", "medium", "high"]

TIER_NAMES: dict[int, TierName] = {1: "low", 2: "medium", 3: "high"}


@dataclass(frozen=True)
class RiskTierDefinition:
    """One risk tier: the patterns that select it and its declared checks."""

    name: TierName
    patterns: tuple[str, ...]
    required_checks: tuple[str, ...] = ()
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, default_name: TierName) -> RiskTierDefinition:
        return cls(
            name=data.get("name", default_name),
            patterns=tuple(data["patterns"]),
            required_checks=tuple(data.get("requiredChecks", ())),
            description=data.get("description", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "patterns": list(self.patterns),
            "requiredChecks": list(self.required_checks),
        }
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class DocsDriftConfig:
    """Docs drift settings."""

    tracked_docs: tuple[str, ...] = ()
    require_update_with_code_change: bool = False
    exempt_patterns: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocsDriftConfig:
        return cls(
            tracked_docs=tuple(data.get("trackedDocs", ())),
            require_update_with_code_change=bool(data.get("requireUpdateWithCodeChange", False)),
            exempt_patterns=tuple(data.get("exemptPatterns", ())),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "trackedDocs": list(self.tracked_docs),
            "requireUpdateWithCodeChange": self.require_update_with_code_change,
            "exemptPatterns": list(self.exempt_patterns),
        }


@dataclass(frozen=True)
class ShaDisciplineConfig:
    """SHA discipline settings."""

    enforce_exact_sha: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"enforceExactSha": self.enforce_exact_sha}


@dataclass(frozen=True)
class RiskConfig:
    """Resolved risk policy configuration with three ordered tiers."""

    version: str
    tier1: RiskTierDefinition
    tier2: RiskTierDefinition
    tier3: RiskTierDefinition
    docs_drift: DocsDriftConfig = field(default_factory=DocsDriftConfig)
    sha_discipline: ShaDisciplineConfig = field(default_factory=ShaDisciplineConfig)

    def tier(self, index: int) -> RiskTierDefinition:
        """Return the tier definition for index 1..3."""
        if index == 1:
            return self.tier1
        if index == 2:
            return self.tier2
        if index == 3:
            return self.tier3
        raise ValueError(f"Unknown risk tier index: {index}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "riskTiers": {
                "tier1": self.tier1.to_dict(),
                "tier2": self.tier2.to_dict(),
                "tier3": self.tier3.to_dict(),
            },
            "docsDrift": self.docs_drift.to_dict(),
            "shaDiscipline": self.sha_discipline.to_dict(),
        }


@dataclass(frozen=True)
class ConfigResolution:
    """A resolved config plus where it came from and what was wrong with the file."""

    config: RiskConfig
    source: Literal["file", "partial", "default"]
    path: str | None = None
    warnings: tuple[str, ...] = ()
