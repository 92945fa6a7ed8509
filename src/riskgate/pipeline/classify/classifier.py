"""Change classifier.

Computes the files changed since the merge-base with the base branch and
assigns each one to a risk tier. Tier patterns overlap (``**/*.md`` and
``src/core/**`` can both match a file), so tiers are tested highest first
and the first match wins. A file no pattern claims lands in tier 2.

Failure to compute the diff is never read as "nothing changed": a missing
merge-base or a failing ``git diff`` classifies the change as tier 3.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from riskgate import ui
from riskgate.pipeline.classify.types import ClassificationResult
from riskgate.pipeline.config.types import RiskConfig
from riskgate.utils.exec import run_git
from riskgate.utils.globmatch import matches_any

DEFAULT_TIER = 2


@dataclass(frozen=True)
class ChangedFiles:
    """Outcome of diffing HEAD against the merge-base with the base branch."""

    merge_base: str | None
    paths: tuple[str, ...]
    diff_ok: bool = True


def classify_file(path: str, config: RiskConfig) -> int:
    """Return the tier (1..3) for a single repository-relative path."""
    if matches_any(path, config.tier3.patterns):
        return 3
    if matches_any(path, config.tier2.patterns):
        return 2
    if matches_any(path, config.tier1.patterns):
        return 1
    return DEFAULT_TIER


def classify_paths(paths: Iterable[str], config: RiskConfig) -> ClassificationResult:
    """Classify changed paths. Pure; blank and duplicate paths are skipped."""
    buckets: dict[int, list[str]] = {1: [], 2: [], 3: []}
    seen: set[str] = set()

    for path in paths:
        if not path or path in seen:
            continue
        seen.add(path)
        buckets[classify_file(path, config)].append(path)

    if not seen:
        return ClassificationResult(max_tier=1, reason="no-changes")

    max_tier = max(tier for tier, files in buckets.items() if files)
    return ClassificationResult(
        tier1_files=tuple(buckets[1]),
        tier2_files=tuple(buckets[2]),
        tier3_files=tuple(buckets[3]),
        max_tier=max_tier,
        reason="classified",
    )


def _ensure_base_ref(repo_root: Path, remote_ref: str, remote: str, base_ref: str) -> None:
    verify = run_git(["rev-parse", "--verify", "--quiet", remote_ref], repo_root=repo_root, check=False)
    if verify.ok:
        return
    # Shallow CI checkouts often lack the base branch; fetch failure is handled by merge-base.
    run_git(["fetch", remote, base_ref, "--depth=1"], repo_root=repo_root, check=False)


def collect_changed_files(repo_root: Path, base_ref: str = "main", remote: str = "origin") -> ChangedFiles:
    """Diff HEAD against its merge-base with ``<remote>/<base_ref>``.

    Args:
        repo_root: Repository root
        base_ref: Base branch name
        remote: Remote holding the base branch; empty string uses base_ref as-is

    Returns:
        ChangedFiles; merge_base is None when it could not be resolved and
        diff_ok is False when git diff itself failed
    """
    remote_ref = f"{remote}/{base_ref}" if remote else base_ref
    if remote:
        _ensure_base_ref(repo_root, remote_ref, remote, base_ref)

    merge_base_result = run_git(["merge-base", remote_ref, "HEAD"], repo_root=repo_root, check=False)
    merge_base = merge_base_result.stdout.strip()
    if not merge_base_result.ok or not merge_base:
        return ChangedFiles(merge_base=None, paths=())

    # -z emits raw NUL-terminated paths: no C-quoting, whitespace kept verbatim.
    diff = run_git(
        ["diff", "--name-only", "-z", f"{merge_base}...HEAD"],
        repo_root=repo_root,
        check=False,
    )
    if not diff.ok:
        return ChangedFiles(merge_base=merge_base, paths=(), diff_ok=False)

    paths = tuple(path for path in diff.stdout.split("\0") if path)
    return ChangedFiles(merge_base=merge_base, paths=paths)


def classify_changes(
    repo_root: Path,
    config: RiskConfig,
    *,
    base_ref: str = "main",
    remote: str = "origin",
) -> ClassificationResult:
    """Classify the changes on HEAD relative to the base branch."""
    remote_ref = f"{remote}/{base_ref}" if remote else base_ref
    changed = collect_changed_files(repo_root, base_ref=base_ref, remote=remote)

    if changed.merge_base is None:
        ui.warning(f"Could not compute merge base against {remote_ref}. Defaulting to Tier 3.")
        return ClassificationResult(max_tier=3, reason="no-merge-base")

    if not changed.diff_ok:
        ui.warning(f"git diff against merge base {changed.merge_base[:12]} failed. Defaulting to Tier 3.")
        return ClassificationResult(max_tier=3, reason="diff-failed")

    if not changed.paths:
        ui.notice("No changed files detected. Defaulting to Tier 1.")
        return ClassificationResult(max_tier=1, reason="no-changes")

    result = classify_paths(changed.paths, config)
    ui.ok(
        f"Classified files: {len(result.tier1_files)} tier-1, {len(result.tier2_files)} tier-2, "
        f"{len(result.tier3_files)} tier-3 → overall Tier {result.max_tier}"
    )
    return result
