from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from lintkit import __version__
from lintkit.engine.types import WILDCARD, Diagnostic
from lintkit.linter import LintResult

_SEVERITY_ICON = {"error": "✖", "warning": "⚠"}
_SEVERITY_STYLE = {"error": "bold red", "warning": "yellow"}


def render_terminal(results: Sequence[LintResult], *, console: Console, show_needless: bool = False) -> None:
    header = Text()
    header.append("lintkit ", style="bold")
    header.append(f"v{__version__}", style="dim")

    console.print(Panel(header, subtitle=f"Checked {len(results)} file(s)", border_style="cyan"))

    for result in results:
        unused = result.needless_disables if show_needless else ()
        if not result.diagnostics and not unused and not result.fixes_applied:
            continue
        console.print(Text(str(result.path) if result.path is not None else "<text>", style="bold"))
        for d in sorted(result.diagnostics, key=_sort_key):
            _print_diagnostic(console, d)
        for key, disabled in unused:
            end = "EOF" if disabled.end is None else str(disabled.end)
            target = "all rules" if key == WILDCARD else key
            line = Text("  ")
            line.append(f"{disabled.start}-{end}".ljust(10), style="dim")
            line.append("needless disable for ", style="yellow")
            line.append(target, style="bold")
            console.print(line)
        if result.fixes_applied:
            console.print(Text(f"  fixed {result.fixes_applied} problem(s)", style="green"))
        console.print()

    _print_summary(results, console=console)


def _print_diagnostic(console: Console, d: Diagnostic) -> None:
    icon = _SEVERITY_ICON.get(d.severity, "•")
    style = _SEVERITY_STYLE.get(d.severity, "")

    loc = f"{d.line}"
    if d.column is not None:
        loc += f":{d.column}"

    line = Text("  ")
    line.append(f"{icon} ", style=style)
    line.append(loc.ljust(10), style="dim")
    line.append(d.message)
    line.append(f"  {d.rule_name}", style="dim")
    console.print(line)


def _print_summary(results: Sequence[LintResult], *, console: Console) -> None:
    errors = sum(1 for r in results for d in r.diagnostics if d.severity == "error")
    warnings = sum(1 for r in results for d in r.diagnostics if d.severity == "warning")
    fixed = sum(r.fixes_applied for r in results)

    summary = Text()
    summary.append(f"{errors} error(s)", style="bold red" if errors else "green")
    summary.append(", ")
    summary.append(f"{warnings} warning(s)", style="yellow" if warnings else "green")
    if fixed:
        summary.append(f", {fixed} fixed", style="green")
    console.print(summary)


def _sort_key(d: Diagnostic) -> tuple[int, int, str]:
    return (d.line, d.column or 0, d.rule_name)
