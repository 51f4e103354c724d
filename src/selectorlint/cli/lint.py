"""CLI command: selectorlint lint -- lint stylesheet files."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from selectorlint.config import ConfigError, LintConfig, find_config, load_config
from selectorlint.linter import lint as run_lint
from selectorlint.model.result import LintResult
from selectorlint.parser import StylesheetParseError
from selectorlint.rules.compound_selectors import RULE_NAME


def _resolve_config(config_path: str | None, max_value: int | None, strict: bool) -> LintConfig:
    if config_path:
        config = load_config(Path(config_path))
    else:
        found = find_config(Path.cwd())
        config = load_config(found) if found else LintConfig()
    if max_value is not None:
        config = config.with_rule(RULE_NAME, max_value)
    if strict:
        config = LintConfig(rules=config.rules, strict=True)
    if not config.rules:
        raise ConfigError("No rules configured. Pass --max or provide a configuration file.")
    return config


def _print_text(path: str, result: LintResult) -> None:
    if not result.diagnostics:
        click.echo(f"OK: {path} (0 diagnostics)")
        return
    for diag in result.diagnostics:
        click.echo(f"{path}:{diag}")


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--max", "max_value", type=int, default=None, help="Maximum compound selectors per selector")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON configuration file (default: nearest .selectorlintrc.json)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--strict", is_flag=True, help="Abort on the first selector that cannot be parsed")
def lint(
    files: tuple[str, ...],
    max_value: int | None,
    config_path: str | None,
    output_format: str,
    strict: bool,
) -> None:
    """Lint stylesheet FILES for overly complex selectors.

    Exits with code 0 if no errors are found, or code 1 if there are errors.
    """
    try:
        config = _resolve_config(config_path, max_value, strict)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    results: list[LintResult] = []
    failed = False
    for path in files:
        source = Path(path).read_text(encoding="utf-8")
        try:
            result = run_lint(source, config, source_name=path)
        except StylesheetParseError as exc:
            click.echo(f"Parse error in {path}: {exc}", err=True)
            failed = True
            continue
        results.append(result)
        if output_format == "text":
            _print_text(path, result)

    errors = sum(len(r.errors) for r in results)
    warnings = sum(len(r.warnings) for r in results)

    if output_format == "json":
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        click.echo()
        click.echo(f"Summary: {errors} error(s), {warnings} warning(s)")

    if failed or errors:
        sys.exit(1)
    sys.exit(0)
