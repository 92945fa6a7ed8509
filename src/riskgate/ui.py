"""Console output for the risk gate: banner, progress lines and CI annotations."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console(emoji=False)
err_console = Console(stderr=True, emoji=False)

RULE = "═" * 51


def render_banner(title: str = "Risk Policy Gate — Preflight Check") -> None:
    console.print(Panel(Text(title, justify="center"), expand=False, border_style="cyan"))
    console.print()


def ok(message: str) -> None:
    """Print a completed-step line."""
    console.print(f"✔ {message}", markup=False, highlight=False, soft_wrap=True)


def notice(message: str) -> None:
    """Emit a GitHub workflow notice annotation."""
    console.print(f"::notice::{message}", markup=False, highlight=False, soft_wrap=True)


def warning(message: str) -> None:
    """Emit a GitHub workflow warning annotation."""
    console.print(f"::warning::{message}", markup=False, highlight=False, soft_wrap=True)


def error(message: str) -> None:
    """Emit a GitHub workflow error annotation on stderr."""
    err_console.print(f"::error::{message}", markup=False, highlight=False, soft_wrap=True)


def section(title: str, body: str) -> None:
    console.print()
    console.print(RULE, markup=False, highlight=False)
    console.print(f" {title}", markup=False, highlight=False)
    console.print(RULE, markup=False, highlight=False)
    console.print(body, markup=False, highlight=False, soft_wrap=True)
    console.print(RULE, markup=False, highlight=False)
