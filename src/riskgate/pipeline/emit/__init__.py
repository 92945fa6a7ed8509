"""Gate result assembly and publication."""

from riskgate.pipeline.emit.emitter import (
    print_result,
    render_output_block,
    render_result_json,
    write_gate_report,
    write_github_output,
)
from riskgate.pipeline.emit.types import GateResult

__all__ = [
    "GateResult",
    "print_result",
    "render_output_block",
    "render_result_json",
    "write_gate_report",
    "write_github_output",
]
