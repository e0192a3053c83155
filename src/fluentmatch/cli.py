from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="fluentmatch", help="Compare values and run data-driven checks")


@app.command()
def diff(
    expected: str = typer.Argument(help="File holding the expected text"),
    actual: str = typer.Argument(help="File holding the actual text"),
    context: int = typer.Option(3, "--context", "-c", min=0, help="Unchanged lines around each change"),
):
    """Print a unified diff of two text files. Exits 1 when they differ."""
    from fluentmatch.diff import unified_diff

    paths = [Path(expected), Path(actual)]
    for path in paths:
        if not path.exists():
            typer.echo(f"Error: file not found: {path}", err=True)
            raise typer.Exit(2)

    text = unified_diff(paths[0].read_text(), paths[1].read_text(), context=context)
    if not text:
        typer.echo("Files are identical")
        return
    typer.echo(text)
    raise typer.Exit(1)


@app.command()
def check(
    check_file: str = typer.Argument(help="Path to a YAML check file"),
    settings: str | None = typer.Option(None, "--settings", "-s", help="YAML file overriding matcher settings"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output to terminal"),
    debug_log: str | None = typer.Option(None, "--debug-log", help="Also write debug output to this file"),
):
    """Evaluate every check in CHECK_FILE. Exits 1 if any check fails."""
    import re

    import yaml
    from pydantic import ValidationError

    from fluentmatch.assertions import evaluate_checks
    from fluentmatch.config import load_check_file, load_settings
    from fluentmatch.errors import InvalidArgument
    from fluentmatch.verbose import setup_logger

    check_path = Path(check_file)
    if not check_path.exists():
        typer.echo(f"Error: check file not found: {check_file}", err=True)
        raise typer.Exit(2)

    logger = setup_logger(Path(debug_log) if debug_log else None, verbose=verbose)

    try:
        check_set = load_check_file(check_path)
        matcher_settings = load_settings(Path(settings)) if settings else check_set.settings
        results = evaluate_checks(check_set.checks, settings=matcher_settings, logger=logger)
    except (ValidationError, ValueError, yaml.YAMLError, re.error) as e:
        # InvalidArgument is a ValueError too
        kind = "invalid check" if isinstance(e, (InvalidArgument, re.error)) else "invalid configuration"
        typer.echo(f"Error: {kind}: {e}", err=True)
        raise typer.Exit(2)

    for result in results:
        status = "PASS" if result.passed else "FAIL"
        typer.echo(f"{status} {result.name}")
        if not result.passed:
            for line in result.message.splitlines():
                typer.echo(f"    {line}")

    passed = sum(1 for r in results if r.passed)
    total_weight = sum(r.weight for r in results)
    grade = sum(r.score * r.weight for r in results) / total_weight if total_weight else 0.0
    typer.echo(f"{passed}/{len(results)} checks passed (weighted score {grade:.2f})")

    if passed != len(results):
        raise typer.Exit(1)


@app.command()
def types():
    """List the type tokens understood by to_be_type()."""
    from fluentmatch.type_registry import type_tokens

    for token in type_tokens():
        typer.echo(token)
