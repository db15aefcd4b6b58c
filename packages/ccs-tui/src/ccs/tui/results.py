"""Outcomes a selector session can end with."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Selected(Generic[T]):
    """An item was picked."""

    item: T


@dataclass(frozen=True)
class Create:
    """The "create new" row was chosen."""


@dataclass(frozen=True)
class CustomInput:
    """The user asked to use the typed filter text as a value."""

    text: str


@dataclass(frozen=True)
class Back:
    """Soft cancel (Esc / Left): go back one level."""


@dataclass(frozen=True)
class Exit:
    """Hard cancel (Ctrl+C): the caller decides whether to leave the process."""


@dataclass(frozen=True)
class Delete(Generic[T]):
    item: T


@dataclass(frozen=True)
class Rename(Generic[T]):
    item: T


@dataclass(frozen=True)
class Refresh:
    """The item list should be reloaded by the caller."""


@dataclass(frozen=True)
class ViewDetails(Generic[T]):
    """Enter on an item while management shortcuts are enabled."""

    item: T


SelectionResult = Union[
    Selected[T],
    Create,
    CustomInput,
    Back,
    Exit,
    Delete[T],
    Rename[T],
    Refresh,
    ViewDetails[T],
]
