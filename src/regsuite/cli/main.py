"""Main CLI application entry point."""

import asyncio
import logging
from contextlib import nullcontext
from pathlib import Path

import typer
from rich.console import Console

from regsuite import __version__
from regsuite.cli.accessibility import should_use_animations
from regsuite.cli.output import OutputFormatter
from regsuite.cli.prompts import is_interactive, select_scenarios
from regsuite.core.browser import PlaywrightBrowser
from regsuite.form.student import load_fixtures
from regsuite.scenarios.registry import (
    GROUPS,
    Scenario,
    get_all_scenarios,
    get_scenario_by_id,
    get_scenarios,
    suggest_scenario,
)
from regsuite.scenarios.runner import ScenarioRunner
from regsuite.utils.config import ConfigLoader
from regsuite.utils.exceptions import (
    ConfigurationError,
    FixtureError,
    InvalidConfiguration,
)
from regsuite.utils.session import SessionLogger

console = Console()

app = typer.Typer(
    name="regsuite",
    help="End-to-end scenarios for the demo student registration form.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"regsuite v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """regsuite - end-to-end scenarios for the student registration form."""
    pass


def _check_group(group: str | None) -> None:
    if group is not None and group not in GROUPS:
        typer.echo(f"Error: Unknown group '{group}'.")
        typer.echo(f"Available groups: {', '.join(GROUPS)}")
        raise typer.Exit(code=3)


def _resolve_scenarios(ids: list[str]) -> list[Scenario]:
    """Look up scenario IDs, exiting with code 3 on the first unknown one."""
    resolved = []
    for scenario_id in ids:
        scenario = get_scenario_by_id(scenario_id)
        if scenario is None:
            suggestion = suggest_scenario(scenario_id)
            typer.echo(f"Error: Unknown scenario '{scenario_id}'.")
            if suggestion:
                typer.echo(f"Did you mean: {suggestion}?")
            typer.echo("Run 'regsuite list' to see available scenarios.")
            raise typer.Exit(code=3)
        resolved.append(scenario)
    return resolved


@app.command("list")
def list_scenarios(
    group: str | None = typer.Option(
        None,
        "--group",
        "-g",
        help=f"Only list one group ({', '.join(GROUPS)})",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Disable colors",
    ),
) -> None:
    """List available scenarios."""
    _check_group(group)
    OutputFormatter(plain=plain).show_scenarios(get_scenarios(group))


@app.command(epilog="Note: Use 'regsuite run --group positive' or interactive mode.")
def run(
    scenario: list[str] | None = typer.Option(
        None,
        "--scenario",
        "-s",
        help="Scenario ID to run (repeatable, bypasses interactive menu)",
    ),
    group: str | None = typer.Option(
        None,
        "--group",
        "-g",
        help=f"Run one group ({', '.join(GROUPS)})",
    ),
    headless: bool | None = typer.Option(
        None,
        "--headless/--headed",
        help="Run browser headless or with a visible window (default from config)",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Site root serving the registration form",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for session artifacts (screenshots, logs)",
    ),
    no_input: bool = typer.Option(
        False,
        "--no-input",
        help="Disable all interactive prompts",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Disable colors and animations",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show detailed progress information",
    ),
) -> None:
    """Run registration form scenarios."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _check_group(group)
    formatter = OutputFormatter(verbose=verbose, plain=plain)

    # Scenario resolution
    if scenario:
        selected = _resolve_scenarios(scenario)
        if group:
            skipped = [s.id for s in selected if s.group != group]
            selected = [s for s in selected if s.group == group]
            if skipped:
                formatter.show_warning(
                    f"Skipping scenarios outside group '{group}': {', '.join(skipped)}"
                )
    elif group:
        selected = get_scenarios(group)
    elif is_interactive(no_input):
        ids = select_scenarios(plain=plain)
        if ids is None:
            typer.echo("Cancelled.")
            raise typer.Exit(code=2)
        selected = _resolve_scenarios(ids)
    else:
        selected = get_all_scenarios()

    if not selected:
        typer.echo("No scenarios matched the selection.")
        raise typer.Exit(code=3)

    try:
        config = ConfigLoader.load()
        if output_dir:
            config.output_dir = output_dir
        if base_url:
            config.base_url = base_url
        if headless is not None:
            config.headless = headless
        fixtures = load_fixtures()
    except (ConfigurationError, FixtureError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=4)

    session = SessionLogger(
        output_dir=config.output_dir,
        suite="registration",
        target=config.form_url,
    )
    browser = PlaywrightBrowser(
        headless=config.headless,
        viewport=config.viewport,
        element_timeout=config.element_timeout,
    )
    runner = ScenarioRunner(
        browser=browser,
        config=config,
        session=session,
        fixtures=fixtures,
        output_callback=formatter.show_progress,
        result_callback=formatter.show_result,
    )

    if verbose:
        console.print(f"[dim]Target: {config.form_url}[/dim]")

    animate = not plain and should_use_animations()
    status = console.status("Running scenarios...") if animate else nullcontext()
    try:
        with status:
            results = asyncio.run(runner.run_all(selected))
    except InvalidConfiguration as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=4)

    formatter.show_summary(results, session.session_dir)
    if all(r.passed for r in results):
        raise typer.Exit(code=0)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
