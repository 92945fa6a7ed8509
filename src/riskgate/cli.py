"""Risk gate CLI - preflight gate and offline classification helpers."""

import json
from pathlib import Path

import typer

from riskgate import __version__, ui
from riskgate.errors import GateFailure
from riskgate.gate import GateInputs, report_config, run_risk_gate
from riskgate.pipeline.checks import resolve_required_checks
from riskgate.pipeline.classify import classify_file, classify_paths
from riskgate.pipeline.config import load_risk_config
from riskgate.pipeline.review import DEFAULT_CHECK_NAME
from riskgate.utils.exec import find_repo_root

cli = typer.Typer(
    name="riskgate",
    help="Risk Policy Gate - risk tiers, required checks and SHA discipline for pull requests",
    no_args_is_help=True,
)


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show riskgate version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    _ = version


def _resolve_root(repo_root: Path | None) -> Path:
    return (repo_root or find_repo_root(Path.cwd())).resolve()


@cli.command(name="gate")
def gate_cmd(
    expected_sha: str | None = typer.Option(
        None,
        "--expected-sha",
        envvar="EXPECTED_SHA",
        help="Commit the CI event was raised for; omit for local mode",
    ),
    base_ref: str = typer.Option(
        "main",
        "--base-ref",
        envvar="BASE_REF",
        help="Base branch the pull request targets",
    ),
    strictness: str = typer.Option(
        "relaxed",
        "--strictness",
        envvar="STRICTNESS",
        help="Docs drift strictness: relaxed, standard or strict",
    ),
    review_status: str | None = typer.Option(
        None,
        "--review-status",
        envvar="REVIEW_AGENT_STATUS",
        help="Explicit review agent status (pending, approved, rejected, skipped)",
    ),
    repository: str | None = typer.Option(
        None,
        "--repository",
        envvar="GITHUB_REPOSITORY",
        help="owner/repo used for the check-run status query",
    ),
    github_output: Path | None = typer.Option(
        None,
        "--github-output",
        envvar="GITHUB_OUTPUT",
        help="GitHub Actions step output file",
    ),
    repo_root: Path | None = typer.Option(
        None,
        "--repo-root",
        help="Repository root (default: git toplevel of the current directory)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Risk config path (default: <repo-root>/harness.config.json)",
    ),
    remote: str = typer.Option(
        "origin",
        "--remote",
        help="Remote holding the base branch",
    ),
    review_check_name: str = typer.Option(
        DEFAULT_CHECK_NAME,
        "--review-check-name",
        help="Name of the review agent check run",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Directory for RISK_GATE_REPORT.json and RISK_GATE_REPORT.md",
    ),
) -> None:
    """Run the risk policy gate for the checked-out commit.

    Exit codes:
      0 - Gate completed (docs drift may have been reported as a warning)
      2 - Policy violation (commit mismatch or strict docs drift)
      1 - Tooling error
    """
    try:
        ui.render_banner()
        result = run_risk_gate(
            GateInputs(
                repo_root=_resolve_root(repo_root),
                expected_sha=expected_sha or None,
                base_ref=base_ref or "main",
                remote=remote,
                strictness=strictness,
                review_status_override=review_status or None,
                repository=repository or None,
                review_check_name=review_check_name,
                config_path=config,
                github_output=github_output,
                out_dir=out,
            )
        )
        ui.console.print()
        ui.ok(
            f"Gate completed — Tier {result.tier} ({result.tier_name}) — "
            f"{len(result.required_checks)} checks required"
        )
    except GateFailure as exc:
        ui.error(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"❌ Risk gate run failed: {e}", err=True)
        raise typer.Exit(code=1) from e


@cli.command(name="classify")
def classify_cmd(
    paths: list[str] = typer.Argument(..., help="Repository-relative paths to classify"),
    repo_root: Path | None = typer.Option(None, "--repo-root", help="Repository root holding the config"),
    config: Path | None = typer.Option(None, "--config", help="Risk config path"),
    as_json: bool = typer.Option(False, "--json", help="Print the classification as JSON"),
) -> None:
    """Classify paths offline, without git, using the resolved risk config."""
    resolution = load_risk_config(_resolve_root(repo_root), config)
    classification = classify_paths(paths, resolution.config)
    checks = resolve_required_checks(classification.max_tier)

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "tier": checks.tier,
                    "requiredChecks": list(checks.checks),
                    "changedFiles": classification.changed_files_dict(),
                },
                indent=2,
            )
        )
        return

    report_config(resolution)
    for path in dict.fromkeys(p for p in paths if p):
        typer.echo(f"{classify_file(path, resolution.config)}  {path}")
    typer.echo(f"\nOverall tier: {checks.tier}")
    typer.echo(f"Required checks: {', '.join(checks.checks)}")


@cli.command(name="checks")
def checks_cmd(
    tier: int = typer.Argument(..., help="Risk tier (1-3)"),
) -> None:
    """Print the required checks for a tier as a JSON array."""
    resolved = resolve_required_checks(tier, announce=False)
    if resolved.warning:
        typer.echo(f"::warning::{resolved.warning}", err=True)
    typer.echo(json.dumps(list(resolved.checks)))


@cli.command(name="config")
def config_cmd(
    repo_root: Path | None = typer.Option(None, "--repo-root", help="Repository root holding the config"),
    config: Path | None = typer.Option(None, "--config", help="Risk config path"),
) -> None:
    """Print the resolved risk config and where it came from."""
    resolution = load_risk_config(_resolve_root(repo_root), config)
    typer.echo(
        json.dumps(
            {
                "source": resolution.source,
                "path": resolution.path,
                "warnings": list(resolution.warnings),
                "config": resolution.config.to_dict(),
            },
            indent=2,
        )
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
