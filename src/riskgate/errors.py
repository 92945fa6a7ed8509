"""Hard-stop failures raised by the risk policy gate."""

from __future__ import annotations


class GateFailure(RuntimeError):
    """Raised when the gate must stop with a policy-violation exit code."""

    exit_code = 2


class CommitMismatchError(GateFailure):
    """Raised when the checked-out commit is not the expected commit."""

    def __init__(self, actual_sha: str, expected_sha: str):
        super().__init__(
            f"SHA discipline violation: HEAD ({actual_sha or 'unknown'}) != expected ({expected_sha}). "
            "The branch changed after this workflow was triggered. Re-run on the latest commit."
        )
        self.actual_sha = actual_sha
        self.expected_sha = expected_sha


class DocsDriftViolation(GateFailure):
    """Raised when docs drift is detected under strict strictness."""

    def __init__(self, warning: str):
        super().__init__(f"Docs drift: {warning}")
        self.warning = warning
