"""Risk policy gate - classifies a pull request and derives its required checks.

Runs the preflight pipeline once per CI invocation:
1. Resolve the risk tier configuration
2. Verify the checked-out commit (SHA discipline)
3. Classify changed files into risk tiers
4. Resolve required checks for the highest tier
5. Detect docs drift
6. Resolve the review agent status
7. Emit the result for the CI orchestrator

Only a commit mismatch and strict-mode docs drift stop the run
(``GateFailure``); every other problem degrades to a safe default.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from riskgate import ui
from riskgate.errors import DocsDriftViolation
from riskgate.pipeline.checks import resolve_required_checks
from riskgate.pipeline.classify import classify_changes
from riskgate.pipeline.commit import read_head_sha, verify_commit
from riskgate.pipeline.config import ConfigResolution, load_risk_config
from riskgate.pipeline.docs_drift import Strictness, check_docs_drift
from riskgate.pipeline.emit import GateResult, print_result, write_gate_report, write_github_output
from riskgate.pipeline.review import DEFAULT_CHECK_NAME, resolve_review_status
from riskgate.pipeline.review.status import CheckRunFetcher


@dataclass(frozen=True)
class GateInputs:
    """Everything one gate run reads from its environment."""

    repo_root: Path
    expected_sha: str | None = None
    base_ref: str = "main"
    remote: str = "origin"
    strictness: Strictness | str = Strictness.RELAXED
    review_status_override: str | None = None
    repository: str | None = None
    review_check_name: str = DEFAULT_CHECK_NAME
    config_path: Path | None = None
    github_output: Path | None = None
    out_dir: Path | None = None


def report_config(resolution: ConfigResolution) -> None:
    """Announce where the configuration came from."""
    if resolution.source == "default" and not resolution.warnings:
        ui.notice("harness.config.json not found — using built-in defaults")
        return
    for message in resolution.warnings:
        ui.warning(message)
    if resolution.source == "file":
        ui.ok(f"Loaded risk config: {resolution.path}")


def run_risk_gate(inputs: GateInputs, *, fetch_check_runs: CheckRunFetcher | None = None) -> GateResult:
    """Run the full gate pipeline and emit its result.

    Args:
        inputs: Gate inputs (usually bound from CI environment variables)
        fetch_check_runs: Optional replacement for the gh-backed check-run query

    Returns:
        The emitted GateResult

    Raises:
        CommitMismatchError: If HEAD is not the expected commit
        DocsDriftViolation: If docs drift is detected under strict strictness
    """
    repo_root = inputs.repo_root.resolve()

    resolution = load_risk_config(repo_root, inputs.config_path)
    report_config(resolution)
    config = resolution.config

    verified = verify_commit(
        inputs.expected_sha,
        read_head_sha(repo_root),
        enforce=config.sha_discipline.enforce_exact_sha,
    )

    classification = classify_changes(
        repo_root,
        config,
        base_ref=inputs.base_ref,
        remote=inputs.remote,
    )

    checks = resolve_required_checks(classification.max_tier)
    ui.ok(f"Required checks ({len(checks.checks)}): {', '.join(checks.checks)}")

    docs_drift = check_docs_drift(inputs.strictness, classification, config.docs_drift)
    if docs_drift.enforced:
        raise DocsDriftViolation(docs_drift.warning)

    review_status = resolve_review_status(
        checks.tier,
        verified.sha,
        override=inputs.review_status_override,
        repository=inputs.repository,
        check_name=inputs.review_check_name,
        fetch=fetch_check_runs,
    )

    result = GateResult.assemble(
        sha=verified.sha,
        classification=classification,
        checks=checks,
        docs_drift=docs_drift,
        review_agent_status=review_status,
    )

    print_result(result)
    if inputs.github_output is not None:
        write_github_output(inputs.github_output, result)
        ui.ok("GitHub Actions outputs written")
    if inputs.out_dir is not None:
        write_gate_report(inputs.out_dir, result)
        ui.ok(f"Reports written to {inputs.out_dir}")

    return result
