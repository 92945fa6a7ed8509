"""Review agent status resolver.

The review agent runs asynchronously and reports through a GitHub check run
on the commit it reviewed. This module only reads that outcome; it never
performs a review. An unknown outcome is ``pending``, which is a safe answer,
so a failing status query never fails the gate.
"""

from __future__ import annotations

import json
import shutil
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any

from riskgate import ui
from riskgate.utils.exec import run_command

REVIEW_REQUIRED_TIER = 2
DEFAULT_CHECK_NAME = "review-agent"


class ReviewStatus(str, Enum):
    """Closed set of review agent states surfaced by the gate."""

    SKIPPED = "skipped"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


CONCLUSION_STATUS: dict[str, ReviewStatus] = {
    "success": ReviewStatus.APPROVED,
    "failure": ReviewStatus.REJECTED,
}

CheckRunFetcher = Callable[[str, str, str], list[dict[str, Any]]]


def fetch_check_runs(repository: str, sha: str, check_name: str, *, cwd: Path | None = None) -> list[dict[str, Any]]:
    """Fetch check runs named ``check_name`` for a commit via ``gh api``.

    Raises:
        RuntimeError: If gh is unavailable or the API call fails
        ValueError: If gh returns something other than JSON objects
    """
    gh_path = shutil.which("gh")
    if not gh_path:
        raise RuntimeError("gh CLI not found on PATH")

    result = run_command(
        [
            gh_path,
            "api",
            f"repos/{repository}/commits/{sha}/check-runs",
            "--jq",
            f'.check_runs[] | select(.name == "{check_name}")',
        ],
        cwd=cwd or Path.cwd(),
    )
    runs = [json.loads(line) for line in result.stdout.splitlines() if line.strip()]
    if not all(isinstance(run, dict) for run in runs):
        raise ValueError("unexpected check run payload")
    return runs


def latest_conclusion(runs: list[dict[str, Any]]) -> str | None:
    """Return the conclusion of the most recent run (highest id, else last listed)."""
    if not runs:
        return None
    ranked = [run for run in runs if isinstance(run.get("id"), int)]
    latest = max(ranked, key=lambda run: run["id"]) if ranked else runs[-1]
    conclusion = latest.get("conclusion")
    return conclusion if isinstance(conclusion, str) else None


def parse_override(value: str | None) -> ReviewStatus | None:
    """Map an explicit status override onto the closed enum; reject anything else."""
    normalized = (value or "").strip().lower()
    if not normalized:
        return None
    try:
        return ReviewStatus(normalized)
    except ValueError:
        ui.warning(f"Ignoring unknown review status override '{value}'")
        return None


def resolve_review_status(
    tier: int,
    sha: str,
    *,
    override: str | None = None,
    repository: str | None = None,
    check_name: str = DEFAULT_CHECK_NAME,
    fetch: CheckRunFetcher | None = None,
) -> ReviewStatus:
    """Resolve the review agent status for the verified commit.

    Resolution order: skipped below the review tier, then an explicit
    override, then the check-run API. Anything inconclusive is pending.
    """
    if tier < REVIEW_REQUIRED_TIER:
        ui.ok(f"Review agent: skipped (Tier {tier})")
        return ReviewStatus.SKIPPED

    explicit = parse_override(override)
    if explicit is not None:
        ui.ok(f"Review agent: {explicit.value} (from override)")
        return explicit

    if not repository or not sha:
        ui.ok("Review agent: pending")
        return ReviewStatus.PENDING

    fetcher = fetch or fetch_check_runs
    try:
        runs = fetcher(repository, sha, check_name)
    except (RuntimeError, ValueError, OSError) as exc:
        ui.notice(f"Review agent status query failed: {exc}")
        ui.ok("Review agent: pending")
        return ReviewStatus.PENDING

    status = CONCLUSION_STATUS.get(latest_conclusion(runs) or "", ReviewStatus.PENDING)
    ui.ok(f"Review agent: {status.value}")
    return status
