"""Numbered menus on top of questionary.

`parse_menu_choice` holds the decision logic and never touches the terminal;
`ask_menu` loops on it until the answer is usable.
"""

from __future__ import annotations

from collections.abc import Sequence

import questionary

from .models import ChoiceKind, InstallAborted, MenuChoice

__all__ = ["ask_menu", "ask_text", "parse_menu_choice", "print_menu"]

QUIT_KEYS = frozenset({"q", "Q"})


def parse_menu_choice(answer: str, options: Sequence[str], default: str, allow_quit: bool = True) -> MenuChoice:
    """Interpret one menu answer.

    Args:
        answer: Raw text typed by the user
        options: Accepted option keys (e.g. "0", "1", "2")
        default: Key used for an empty answer
        allow_quit: Accept "q" / "Q" as quit

    Returns:
        A valid, invalid or quit MenuChoice
    """
    answer = answer.strip() or default
    if allow_quit and answer in QUIT_KEYS:
        return MenuChoice.quit()
    if answer in options:
        return MenuChoice.valid(answer)
    return MenuChoice.invalid()


def ask_text(message: str) -> str:
    """Prompt for a line of text.

    Raises:
        InstallAborted: on Ctrl-C or end of input
    """
    answer = questionary.text(message).ask()
    if answer is None:
        raise InstallAborted("Prompt cancelled")
    return str(answer)


def print_menu(title: str, lines: Sequence[str]) -> None:
    """Print a menu title and its numbered lines."""
    questionary.print(title, style="bold fg:yellow")
    for line in lines:
        questionary.print(line)


def ask_menu(options: Sequence[str], default: str, hint: str) -> MenuChoice:
    """Ask until the answer is a valid option or quit.

    Args:
        options: Accepted option keys
        default: Key used for an empty answer
        hint: Text shown after an invalid answer
    """
    while True:
        choice = parse_menu_choice(ask_text(f"Enter option [default: {default}] | q to quit:"), options, default)
        if choice.kind is not ChoiceKind.INVALID:
            return choice
        questionary.print(f"Invalid option. {hint}", style="fg:red")
