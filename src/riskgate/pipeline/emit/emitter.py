"""Result emitter.

Publishes a GateResult as pretty JSON on the console, as GitHub Actions
step outputs (flat ``key=value`` lines plus one heredoc block carrying the
full JSON), and optionally as report files. Every writer re-derives its
output from the result and overwrites what an earlier run of the gate
wrote, so emitting the same result twice leaves the same files behind.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import TextIO

from riskgate import ui
from riskgate.pipeline.emit.types import GateResult
from riskgate.schemas.validator import validate_data
from riskgate.utils.canonical_json import atomic_write_text, sha256_text, write_json

RESULT_DELIMITER = "GATE_EOF"
RESULT_KEY = "result"
SCALAR_KEYS = ("sha", "tier", "tier-name", "required-checks", "docs-drift", "review-agent-status")
GATE_OUTPUT_KEYS = frozenset((*SCALAR_KEYS, RESULT_KEY))

REPORT_JSON = "RISK_GATE_REPORT.json"
REPORT_MD = "RISK_GATE_REPORT.md"
RESULT_SCHEMA = "gate_result"

_HEREDOC_RE = re.compile(r"^(?P<key>[^=<\s]+)<<(?P<delim>\S+)$")


def render_result_json(result: GateResult) -> str:
    """Pretty JSON for humans and for the multi-line step output."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def render_output_block(result: GateResult) -> str:
    """Render the step-output block: one line per scalar plus the JSON heredoc."""
    payload = result.to_dict()
    lines = [
        f"sha={payload['sha']}",
        f"tier={payload['tier']}",
        f"tier-name={payload['tierName']}",
        f"required-checks={json.dumps(payload['requiredChecks'])}",
        f"docs-drift={'true' if payload['docsDrift']['detected'] else 'false'}",
        f"review-agent-status={payload['reviewAgentStatus']}",
        f"{RESULT_KEY}<<{RESULT_DELIMITER}",
        render_result_json(result),
        RESULT_DELIMITER,
    ]
    return "\n".join(lines) + "\n"


def strip_gate_outputs(text: str) -> list[str]:
    """Return the lines of an output file without entries owned by the gate.

    Heredoc blocks written by other steps are kept intact, even when their
    bodies contain lines that look like gate keys.
    """
    lines = text.splitlines()
    kept: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        heredoc = _HEREDOC_RE.match(line)
        if heredoc:
            block = [line]
            i += 1
            while i < len(lines) and lines[i] != heredoc.group("delim"):
                block.append(lines[i])
                i += 1
            if i < len(lines):
                block.append(lines[i])
                i += 1
            if heredoc.group("key") not in GATE_OUTPUT_KEYS:
                kept.extend(block)
            continue

        key, sep, _ = line.partition("=")
        if not (sep and key in GATE_OUTPUT_KEYS):
            kept.append(line)
        i += 1
    return kept


def write_github_output(path: Path, result: GateResult) -> None:
    """Write step outputs, replacing any block a previous gate run left in the file."""
    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    kept = strip_gate_outputs(existing)
    prefix = "\n".join(kept) + "\n" if kept else ""
    atomic_write_text(path, prefix + render_output_block(result))


def write_gate_report(out_dir: Path, result: GateResult) -> dict[str, str]:
    """Write RISK_GATE_REPORT.json (canonical, schema-validated) and RISK_GATE_REPORT.md.

    Returns:
        Mapping of artifact name to SHA-256 of its content

    Raises:
        ValueError: If the result does not satisfy the gate_result schema
    """
    payload = result.to_dict()
    validate_data(payload, RESULT_SCHEMA, strict=True)

    out_dir.mkdir(parents=True, exist_ok=True)
    write_json(out_dir / REPORT_JSON, payload)

    md_path = out_dir / REPORT_MD
    with open(md_path, "w", encoding="utf-8") as f:
        _write_markdown_report(f, result)

    return {
        REPORT_JSON: sha256_text((out_dir / REPORT_JSON).read_text(encoding="utf-8")),
        REPORT_MD: sha256_text(md_path.read_text(encoding="utf-8")),
    }


def print_result(result: GateResult) -> None:
    ui.section("Risk Policy Gate Result", render_result_json(result))


def _write_markdown_report(f: TextIO, result: GateResult) -> None:
    """Write human-readable markdown report."""
    f.write("# Risk Policy Gate Report\n\n")
    f.write(f"**Commit**: `{result.sha or 'unknown'}`\n\n")
    f.write(f"**Tier**: {result.tier} ({result.tier_name})\n\n")
    f.write(f"**Review agent**: {result.review_agent_status.value}\n\n")

    f.write("## Required Checks\n\n")
    for check in result.required_checks:
        f.write(f"- {check}\n")
    f.write("\n")

    f.write("## Changed Files\n\n")
    for tier, files in ((3, result.tier3_files), (2, result.tier2_files), (1, result.tier1_files)):
        f.write(f"### Tier {tier} ({len(files)})\n\n")
        for path in files:
            f.write(f"- `{path}`\n")
        if files:
            f.write("\n")

    f.write("## Docs Drift\n\n")
    if result.docs_drift.detected:
        f.write(f"⚠️ {result.docs_drift.warning}\n")
    else:
        f.write("No drift detected.\n")
