"""Required-check resolver.

The check sets per tier are fixed platform policy and do not come from
``harness.config.json``; configuration only decides which tier a change
lands in. Each tier's list is a strict superset of the one below it.
"""

from __future__ import annotations

from dataclasses import dataclass

from riskgate import ui

TIER_CHECKS: dict[int, tuple[str, ...]] = {
    1: ("lint", "harness-smoke"),
    2: ("lint", "type-check", "test", "build", "structural-tests", "review-agent", "harness-smoke"),
    3: (
        "lint",
        "type-check",
        "test",
        "build",
        "structural-tests",
        "review-agent",
        "harness-smoke",
        "manual-approval",
        "expanded-coverage",
    ),
}

MAX_TIER = 3


@dataclass(frozen=True)
class RequiredChecks:
    """Checks required for a tier; ``warning`` is set when the tier was clamped."""

    tier: int
    checks: tuple[str, ...]
    warning: str | None = None


def resolve_required_checks(tier: object, *, announce: bool = True) -> RequiredChecks:
    """Map a tier to its required checks, clamping unknown tiers to tier 3.

    With ``announce=False`` the clamp warning is only carried on the result.
    """
    if isinstance(tier, int) and not isinstance(tier, bool) and tier in TIER_CHECKS:
        return RequiredChecks(tier=tier, checks=TIER_CHECKS[tier])

    message = f"Unexpected tier {tier!r}. Applying Tier {MAX_TIER} checks as safeguard."
    if announce:
        ui.warning(message)
    return RequiredChecks(tier=MAX_TIER, checks=TIER_CHECKS[MAX_TIER], warning=message)


def checks_for(tier: object) -> list[str]:
    """Return the ordered required-check names for a tier."""
    return list(resolve_required_checks(tier).checks)
