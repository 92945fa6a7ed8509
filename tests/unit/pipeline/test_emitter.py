"""Tests for gate result emission."""

import json
from pathlib import Path

import pytest

from riskgate.pipeline.checks import resolve_required_checks
from riskgate.pipeline.classify import classify_paths
from riskgate.pipeline.config import DEFAULT_CONFIG
from riskgate.pipeline.docs_drift import DocsDriftResult
from riskgate.pipeline.emit import GateResult, render_output_block, write_gate_report, write_github_output
from riskgate.pipeline.emit.emitter import REPORT_JSON, REPORT_MD, print_result, render_result_json, strip_gate_outputs
from riskgate.pipeline.review import ReviewStatus


@pytest.fixture
def result() -> GateResult:
    classification = classify_paths(["src/utils/helpers.ts", "README.md"], DEFAULT_CONFIG)
    return GateResult.assemble(
        sha="abc123",
        classification=classification,
        checks=resolve_required_checks(classification.max_tier),
        docs_drift=DocsDriftResult(detected=True, warning='say "hi"'),
        review_agent_status=ReviewStatus.PENDING,
    )


def _parse_outputs(text: str) -> dict[str, str]:
    outputs: dict[str, str] = {}
    lines = iter(text.splitlines())
    for line in lines:
        if "<<" in line and "=" not in line.split("<<", 1)[0]:
            key, delim = line.split("<<", 1)
            body = []
            for body_line in lines:
                if body_line == delim:
                    break
                body.append(body_line)
            outputs[key] = "\n".join(body)
        else:
            key, _, value = line.partition("=")
            outputs[key] = value
    return outputs


def test_to_dict_uses_contract_keys(result: GateResult):
    payload = result.to_dict()

    assert payload == {
        "sha": "abc123",
        "tier": 2,
        "tierName": "medium",
        "requiredChecks": [
            "lint",
            "type-check",
            "test",
            "build",
            "structural-tests",
            "review-agent",
            "harness-smoke",
        ],
        "changedFiles": {"tier1": ["README.md"], "tier2": ["src/utils/helpers.ts"], "tier3": []},
        "docsDrift": {"detected": True, "warning": 'say "hi"'},
        "reviewAgentStatus": "pending",
    }


def test_output_block_round_trips_result(result: GateResult):
    outputs = _parse_outputs(render_output_block(result))

    assert outputs["sha"] == "abc123"
    assert outputs["tier"] == "2"
    assert outputs["tier-name"] == "medium"
    assert json.loads(outputs["required-checks"]) == list(result.required_checks)
    assert outputs["docs-drift"] == "true"
    assert outputs["review-agent-status"] == "pending"
    assert json.loads(outputs["result"]) == result.to_dict()


def test_write_github_output_is_idempotent(tmp_path: Path, result: GateResult):
    output = tmp_path / "github_output"

    write_github_output(output, result)
    first = output.read_text(encoding="utf-8")
    write_github_output(output, result)
    second = output.read_text(encoding="utf-8")

    assert first == second
    assert second.count("result<<GATE_EOF") == 1
    assert second.count("\nsha=") + second.startswith("sha=") == 1


def test_write_github_output_keeps_foreign_entries(tmp_path: Path, result: GateResult):
    output = tmp_path / "github_output"
    output.write_text(
        "cache-hit=true\nnotes<<EOF\nsha=not-ours\nEOF\nsha=stale\ntier=3\nresult<<GATE_EOF\n{}\nGATE_EOF\n",
        encoding="utf-8",
    )

    write_github_output(output, result)
    outputs = _parse_outputs(output.read_text(encoding="utf-8"))

    assert outputs["cache-hit"] == "true"
    assert outputs["notes"] == "sha=not-ours"
    assert outputs["sha"] == "abc123"
    assert outputs["tier"] == "2"
    assert json.loads(outputs["result"]) == result.to_dict()


def test_strip_gate_outputs_handles_unterminated_heredoc():
    assert strip_gate_outputs("keep=1\nresult<<GATE_EOF\n{") == ["keep=1"]


def test_write_gate_report(tmp_path: Path, result: GateResult):
    out_dir = tmp_path / "reports"

    digests = write_gate_report(out_dir, result)
    first_json = (out_dir / REPORT_JSON).read_text(encoding="utf-8")
    write_gate_report(out_dir, result)

    assert (out_dir / REPORT_JSON).read_text(encoding="utf-8") == first_json
    assert json.loads(first_json) == result.to_dict()
    markdown = (out_dir / REPORT_MD).read_text(encoding="utf-8")
    assert "**Tier**: 2 (medium)" in markdown
    assert "- `src/utils/helpers.ts`" in markdown
    assert set(digests) == {REPORT_JSON, REPORT_MD}


def test_gate_result_is_immutable(result: GateResult):
    with pytest.raises(AttributeError):
        result.tier = 3  # type: ignore[misc]


def test_print_result_keeps_emoji_codes_verbatim(capsys):
    classification = classify_paths(["docs/:rocket:.txt"], DEFAULT_CONFIG)
    result = GateResult.assemble(
        sha="abc123",
        classification=classification,
        checks=resolve_required_checks(classification.max_tier),
        docs_drift=DocsDriftResult(),
        review_agent_status=ReviewStatus.SKIPPED,
    )

    print_result(result)
    out = capsys.readouterr().out

    assert '"docs/:rocket:.txt"' in out
    assert "🚀" not in out
    assert render_result_json(result) in out
