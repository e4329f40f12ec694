"""Interactive prompts for scenario selection.

Provides TTY detection and a questionary checkbox listing every scenario,
grouped by scenario group.
"""

import os
import sys

import questionary

from regsuite.cli.accessibility import get_questionary_style
from regsuite.scenarios.registry import GROUPS, get_scenarios


def is_interactive(no_input_flag: bool = False) -> bool:
    """Determine if the terminal is interactive.

    Args:
        no_input_flag: If True, forces non-interactive mode (highest precedence).

    Returns:
        True if prompts should be shown, False otherwise.
    """
    if no_input_flag:
        return False

    if "REGSUITE_NO_PROMPTS" in os.environ:
        return False

    if "CI" in os.environ:
        return False

    return sys.stdin.isatty() and sys.stdout.isatty()


def select_scenarios(plain: bool = False) -> list[str] | None:
    """Prompt the user to tick the scenarios to run.

    Args:
        plain: If True, use plain styling (no colors).

    Returns:
        The selected scenario IDs in table order, or None if the user
        cancels (Ctrl+C) or selects nothing.
    """
    style = None if plain else get_questionary_style()

    choices: list[questionary.Choice | questionary.Separator] = []
    for group in GROUPS:
        choices.append(questionary.Separator(f"--- {group} ---"))
        for scenario in get_scenarios(group):
            choices.append(
                questionary.Choice(
                    title=f"{scenario.id} - {scenario.title}", value=scenario.id
                )
            )

    result: list[str] | None = questionary.checkbox(
        "Select scenarios to run:",
        choices=choices,
        style=style,
    ).ask()

    if not result:
        return None
    return result
