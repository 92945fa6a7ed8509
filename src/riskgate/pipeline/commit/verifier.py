"""Commit verifier.

Decisions made about one commit (for example a review agent approving it)
must not be applied to a later commit pushed to the same branch. The gate
therefore refuses to run when HEAD differs from the commit the CI event
was raised for.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from riskgate import ui
from riskgate.errors import CommitMismatchError
from riskgate.utils.exec import run_git

VerifyMode = Literal["verified", "local", "unenforced"]


@dataclass(frozen=True)
class VerifiedSha:
    """The commit the rest of the gate reasons about."""

    sha: str
    expected: str | None
    mode: VerifyMode


def read_head_sha(repo_root: Path) -> str:
    """Return the checked-out commit, or an empty string when git cannot tell."""
    result = run_git(["rev-parse", "HEAD"], repo_root=repo_root, check=False)
    return result.stdout.strip() if result.ok else ""


def verify_commit(
    expected_sha: str | None,
    actual_sha: str,
    *,
    enforce: bool = True,
) -> VerifiedSha:
    """Compare the expected commit with the checked-out commit.

    Args:
        expected_sha: Commit the CI event refers to; None or blank means local mode
        actual_sha: Commit currently checked out
        enforce: When False a mismatch only warns (shaDiscipline.enforceExactSha)

    Returns:
        VerifiedSha describing the accepted commit

    Raises:
        CommitMismatchError: If the commits differ and enforcement is on
    """
    expected = (expected_sha or "").strip()
    if not expected:
        ui.notice("EXPECTED_SHA not set — skipping SHA discipline check (local mode)")
        return VerifiedSha(sha=actual_sha, expected=None, mode="local")

    if actual_sha and actual_sha.lower() == expected.lower():
        ui.ok(f"SHA verified: {actual_sha[:12]}")
        return VerifiedSha(sha=actual_sha, expected=expected, mode="verified")

    if not enforce:
        ui.warning(
            f"HEAD ({actual_sha or 'unknown'}) differs from expected ({expected}); "
            "continuing because shaDiscipline.enforceExactSha is false"
        )
        return VerifiedSha(sha=actual_sha, expected=expected, mode="unenforced")

    raise CommitMismatchError(actual_sha, expected)
