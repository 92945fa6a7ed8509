"""Tier to required-check mapping."""

from riskgate.pipeline.checks.resolver import TIER_CHECKS, RequiredChecks, checks_for, resolve_required_checks

__all__ = ["TIER_CHECKS", "RequiredChecks", "checks_for", "resolve_required_checks"]
