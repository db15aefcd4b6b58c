"""CLI entry point for ccs-tui. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from ccs.tui.config import CursorStyle, SelectorConfig
from ccs.tui.errors import SelectionCancelled, SelectorError, exit_cancelled
from ccs.tui.managed import ManagedSelector, show_item_details
from ccs.tui.options import StringItem
from ccs.tui.prompts import confirm_deletion, prompt_rename, prompt_text
from ccs.tui.results import Back, CustomInput, Delete, Exit, Rename, Selected
from ccs.tui.selector import Selector

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Logging verbosity",
)
@click.option("--log-file", default=None, help="Write logs to this file instead of stderr")
@click.pass_context
def main(ctx, log_level, log_file):
    """Interactive terminal pickers."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )
    ctx.ensure_object(dict)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _terminal(ctx):
    return ctx.obj.get("terminal")


# ---------------------------------------------------------------------------
# pick
# ---------------------------------------------------------------------------


@main.command()
@click.argument("items", nargs=-1, required=True)
@click.option("--message", "-m", default="Select an option", help="Prompt shown above the list")
@click.option("--page-size", type=click.IntRange(min=1), default=10, help="Visible rows")
@click.option("--no-filter", is_flag=True, help="Hide the filter row")
@click.option("--custom", is_flag=True, help="Offer the filter text as a custom value")
@click.option(
    "--cursor-style",
    type=click.Choice([style.value for style in CursorStyle]),
    default=CursorStyle.BLOCK.value,
    help="Cursor shape while the picker is open",
)
@click.pass_context
def pick(ctx, items, message, page_size, no_filter, custom, cursor_style):
    """Pick one of ITEMS and print it."""
    config = SelectorConfig(
        page_size=page_size,
        cursor_style=CursorStyle(cursor_style),
        allow_custom=custom,
        allow_management=False,
        show_filter=not no_filter,
    )
    selector = Selector(message, [StringItem(item) for item in items], config, terminal=_terminal(ctx))
    try:
        result = selector.prompt()
    except SelectorError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if isinstance(result, Selected):
        click.echo(result.item.value)
    elif isinstance(result, CustomInput) and result.text:
        click.echo(result.text)
    else:
        logger.debug("nothing selected (%s)", type(result).__name__)
        sys.exit(1)


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------


class DemoPicker(ManagedSelector[StringItem]):
    """In-memory list with create, rename and delete."""

    message = "Select a profile"
    item_type = "profile"

    def __init__(self, names, **kwargs):
        config = SelectorConfig(allow_create=True, allow_custom=True)
        super().__init__(config=config, **kwargs)
        self.names = list(names)

    def load_items(self):
        return [StringItem(name) for name in self.names]

    def _ask(self, prompt, *args, **kwargs):
        try:
            return prompt(*args, terminal=self.terminal, **kwargs)
        except SelectionCancelled as exc:
            if exc.hard:
                exit_cancelled()
            return None

    def on_create(self):
        name = self._ask(prompt_text, f"New {self.item_type} name:", placeholder="my-profile")
        if name is not None and name not in self.names:
            self.names.append(name)
            logger.info("created %s %s", self.item_type, name)
        return True

    def on_delete(self, item):
        if confirm_deletion(item.value, self.item_type, terminal=self.terminal):
            self.names.remove(item.value)
            logger.info("deleted %s %s", self.item_type, item.value)
        return True

    def on_rename(self, item):
        new_name = self._ask(prompt_rename, item.value, self.item_type)
        if new_name is not None and new_name != item.value:
            self.names[self.names.index(item.value)] = new_name
            logger.info("renamed %s %s to %s", self.item_type, item.value, new_name)
        return True

    def on_refresh(self):
        logger.debug("reloading %d %ss", len(self.names), self.item_type)
        return True

    def on_custom_input(self, text):
        return StringItem(text) if text else None


DEMO_PROFILES = ["work", "personal", "staging", "production", "sandbox"]


@main.command()
@click.pass_context
def demo(ctx):
    """Manage an in-memory profile list."""
    picker = DemoPicker(DEMO_PROFILES, terminal=_terminal(ctx))
    try:
        while True:
            item = picker.run()
            if item is None:
                click.echo("No profile selected.")
                return

            details = show_item_details(item, f"Profile: {item.value}", terminal=picker.terminal)
            if isinstance(details, Selected):
                click.echo(f"Selected profile: {details.item.value}")
                return
            if isinstance(details, Exit):
                exit_cancelled()
            if isinstance(details, Rename):
                picker.on_rename(details.item)
            elif isinstance(details, Delete):
                picker.on_delete(details.item)
    except SelectorError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
