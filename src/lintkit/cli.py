from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import click
import typer
from rich.console import Console

from lintkit import __version__
from lintkit.config import ConfigError, LintConfig, compute_enabled_rules, load_config
from lintkit.engine.reporter import ReportError
from lintkit.linter import LintResult, lint_path
from lintkit.logging_utils import configure_logging
from lintkit.reporters.json_reporter import render_json
from lintkit.reporters.terminal import render_terminal

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="lintkit: line-based linter with suppression-aware autofix.",
)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def _main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose logs (printed to stderr)."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Reduce non-essential output."),
    ] = False,
) -> None:
    """lintkit CLI."""

    if verbose and quiet:
        raise typer.BadParameter("Choose at most one: --verbose or --quiet.")
    configure_logging(verbose=verbose, quiet=quiet)
    ctx.obj = {"verbose": verbose, "quiet": quiet}


def _cli_settings() -> dict[str, bool]:
    ctx = click.get_current_context(silent=True)
    if ctx is None or not isinstance(ctx.obj, dict):
        return {"verbose": False, "quiet": False}
    return {"verbose": bool(ctx.obj.get("verbose", False)), "quiet": bool(ctx.obj.get("quiet", False))}


def _discover(paths: list[Path], *, pattern: str) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(p for p in sorted(path.rglob(pattern)) if p.is_file())
        else:
            files.append(path)
    return files


def _load_config_or_exit(config_dir: Path) -> LintConfig:
    try:
        return load_config(config_dir)
    except ConfigError as exc:
        err_console.print(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2) from exc


@app.command()
def check(
    paths: Annotated[
        list[Path],
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=True,
            resolve_path=True,
            help="Files or directories to lint.",
        ),
    ],
    config_dir: Annotated[
        Path,
        typer.Option(
            "--config-dir",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Directory holding the pyproject.toml with [tool.lintkit] (default: current directory).",
        ),
    ] = Path("."),
    pattern: Annotated[
        str,
        typer.Option("--glob", help="File pattern used when a directory is given.", show_default=True),
    ] = "*.py",
    fix: Annotated[
        bool | None,
        typer.Option("--fix/--no-fix", help="Apply fixes (default: use config).", show_default=False),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="With --fix, don't write changes; print a unified diff."),
    ] = False,
    backup: Annotated[
        bool,
        typer.Option("--backup", help="Create a .lintkit.bak backup before writing fixes."),
    ] = False,
    errors_only: Annotated[
        bool,
        typer.Option("--errors-only", help="Drop every diagnostic that is not an error."),
    ] = False,
    ignore_disables: Annotated[
        bool,
        typer.Option("--ignore-disables", help="Report problems inside lintkit-disable ranges too."),
    ] = False,
    report_needless: Annotated[
        bool,
        typer.Option("--report-needless-disables", help="Report disable directives that suppressed nothing."),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: terminal, json.", show_default=True),
    ] = "terminal",
) -> None:
    """
    Lint files, optionally applying fixes that respect disable directives.
    """

    normalized = output_format.strip().lower()
    if normalized not in {"terminal", "json"}:
        raise typer.BadParameter("Unsupported format. Use: terminal, json.")

    config = _load_config_or_exit(config_dir)
    config = replace(
        config,
        fix=config.fix if fix is None else fix,
        quiet=config.quiet or errors_only,
        ignore_disables=config.ignore_disables or ignore_disables,
        report_needless_disables=config.report_needless_disables or report_needless,
    )

    files = _discover(paths, pattern=pattern)
    if _cli_settings()["verbose"]:
        logger.debug("discovered %d candidate file(s)", len(files))

    results: list[LintResult] = []
    for file_path in files:
        try:
            results.append(lint_path(file_path, config, dry_run=dry_run, backup=backup))
        except ReportError as exc:
            err_console.print(f"{file_path}: rule {exc.rule_name!r} is broken: {exc}")
            raise typer.Exit(code=2) from exc

    if dry_run:
        for result in results:
            if result.diff:
                typer.echo(result.diff)

    if normalized == "json":
        typer.echo(render_json(results, show_needless=config.report_needless_disables))
    elif not _cli_settings()["quiet"] or any(r.diagnostics for r in results):
        render_terminal(results, console=console, show_needless=config.report_needless_disables)

    if any(r.has_error for r in results):
        raise typer.Exit(code=1)


@app.command()
def rules(
    config_dir: Annotated[
        Path,
        typer.Option(
            "--config-dir",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Directory holding the pyproject.toml with [tool.lintkit] (default: current directory).",
        ),
    ] = Path("."),
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: terminal, json.", show_default=True),
    ] = "terminal",
) -> None:
    """
    List the built-in rules and whether the current config enables them.
    """

    from rich.table import Table

    from lintkit.rules.registry import rule_meta_by_name

    config = _load_config_or_exit(config_dir)
    metas = rule_meta_by_name()
    enabled = compute_enabled_rules(config, available=metas)

    rows = [
        {
            "name": name,
            "enabled": name in enabled,
            "fixable": meta.fixable,
            "severity": config.rule_severities.get(name) or meta.default_severity or config.default_severity,
            "description": meta.description,
        }
        for name, meta in metas.items()
    ]

    normalized = output_format.strip().lower()
    if normalized == "json":
        typer.echo(json.dumps(rows, indent=2, sort_keys=True))
        return
    if normalized != "terminal":
        raise typer.BadParameter("Unsupported format. Use: terminal, json.")

    table = Table(title="lintkit rules")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Enabled", justify="center")
    table.add_column("Fixable", justify="center")
    table.add_column("Severity")
    table.add_column("Description")
    for row in rows:
        table.add_row(
            str(row["name"]),
            "yes" if row["enabled"] else "no",
            "yes" if row["fixable"] else "no",
            str(row["severity"]),
            str(row["description"]),
        )
    console.print(table)
