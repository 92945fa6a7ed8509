"""Command runners for git and gh invocations."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ExecError(RuntimeError):
    """Raised when a command returns non-zero in check mode."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        detail = (result.stderr or result.stdout).strip()
        super().__init__(f"command failed ({result.returncode}): {rendered}\n{detail}")
        self.result = result


def run_command(
    argv: list[str],
    *,
    cwd: Path,
    check: bool = True,
) -> ExecResult:
    """Run command and return structured result.

    A missing executable is reported as returncode 127 instead of raising,
    so callers running in degrade mode see a uniform failure.
    """
    try:
        completed = subprocess.run(argv, cwd=cwd, capture_output=True, text=True, check=False)
        returncode, stdout, stderr = completed.returncode, completed.stdout, completed.stderr
    except FileNotFoundError as exc:
        returncode, stdout, stderr = 127, "", str(exc)
    result = ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )
    if check and result.returncode != 0:
        raise ExecError(result)
    return result


def run_git(
    args: list[str],
    *,
    repo_root: Path,
    check: bool = True,
) -> ExecResult:
    """Run git command rooted at repo."""
    return run_command(["git", *args], cwd=repo_root, check=check)


def find_repo_root(start: Path) -> Path:
    """Return the git toplevel containing start, or start itself outside a repo."""
    result = run_git(["rev-parse", "--show-toplevel"], repo_root=start, check=False)
    toplevel = result.stdout.strip()
    if result.ok and toplevel:
        return Path(toplevel)
    return start
