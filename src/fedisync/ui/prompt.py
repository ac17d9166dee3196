# ruff: noqa: T201

"""Blocking terminal interaction: confirmation, menu and free-text prompts."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    InputFunc = Callable[[str], str]


class MenuChoice(IntEnum):
    EXPORT_FILTERS = 1
    EXPORT_TAGS = 2
    IMPORT_FILTERS = 3
    IMPORT_TAGS = 4
    FOLLOW_TAG = 5


MENU_TEXT = """\
Export
 1. Filters
 2. Tags
-
Import
 3. Filters
 4. Tags
-
 5. Follow a tag by name
-"""


def confirm(prompt: str, *, input_func: InputFunc | None = None) -> bool:
    """Ask once; only an exact ``y`` (surrounding whitespace ignored) says yes.

    A closed or broken stdin counts as no.
    """

    read = input_func or input
    try:
        answer = read(prompt)
    except (EOFError, OSError, KeyboardInterrupt):
        print()
        return False
    return answer.strip() == "y"


def display(text: str) -> None:
    print(text.rstrip("\n"))


def ask_menu_choice(*, input_func: InputFunc | None = None) -> MenuChoice:
    """Show the numbered menu and return the selected action.

    Raises ``ValueError`` for anything that is not one of the listed numbers.
    """

    read = input_func or input
    print(MENU_TEXT)
    try:
        raw = read("Enter your choice: ")
    except (EOFError, OSError) as exc:
        raise ValueError("No menu choice entered") from exc
    try:
        return MenuChoice(int(raw.strip()))
    except ValueError as exc:
        raise ValueError(f"Invalid menu choice: {raw.strip()!r}") from exc


def ask_text(prompt: str, *, input_func: InputFunc | None = None) -> str:
    read = input_func or input
    try:
        return read(prompt).strip()
    except (EOFError, OSError):
        return ""
