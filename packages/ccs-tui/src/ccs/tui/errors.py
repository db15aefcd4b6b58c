"""Error types raised by selectors and prompts.

Two families are kept apart: cancellations (the user pressed Esc or Ctrl+C)
are expected control flow and mean "nothing was selected", while every other
``SelectorError`` is a real failure the caller has to decide about.
"""

from __future__ import annotations

from typing import NoReturn

import click

CANCELLED_MESSAGE = "🚫 Operation cancelled by user."


class SelectorError(Exception):
    """Base class for selector failures."""

    @property
    def is_cancellation(self) -> bool:
        return False


class SelectionCancelled(SelectorError):
    """The user backed out of a prompt.

    ``hard`` is set when the cancellation came from Ctrl+C rather than Esc.
    """

    def __init__(self, message: str = "User cancelled selection", *, hard: bool = False) -> None:
        super().__init__(message)
        self.hard = hard

    @property
    def is_cancellation(self) -> bool:
        return True


class SelectorIOError(SelectorError):
    """Reading from or writing to the terminal failed."""


class OperationNotSupported(SelectorError):
    """A management hook was triggered that the picker does not implement."""


class InvalidInput(SelectorError, ValueError):
    """A configuration value or user input was rejected."""


def exit_cancelled() -> NoReturn:
    """Tell the user the operation was cancelled and leave the process."""
    click.secho(CANCELLED_MESSAGE, fg="yellow")
    raise SystemExit(0)
