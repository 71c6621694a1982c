"""Built-in slash commands for the market list."""

from typing import Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from market_list.cli.commands import Command, CommandCategory
from market_list.tasks import Task, locate


def parse_position(text: str) -> tuple[int, int] | None:
    """Parse a 1-based "section.row" position into 0-based indices."""
    section, sep, row = text.strip().partition(".")
    if not sep or not section.isdigit() or not row.isdigit():
        return None
    return int(section) - 1, int(row) - 1


def parse_index(text: str) -> int | None:
    """Parse a 1-based flat list position into a 0-based index."""
    text = text.strip()
    if not text.isdigit():
        return None
    return int(text) - 1


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands",
            aliases=["h", "?"],
            usage="/help [command]",
            examples=["/help", "/help rm"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: Any) -> None:
        name = args.strip().lstrip("/")
        if name:
            cmd = app.command_registry.get(name)
            if cmd is None:
                app.show_error(f"Unknown command: /{name}")
                return
            app.show_message(cmd.get_help())
            return

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Command", style="bold cyan", no_wrap=True)
        table.add_column("Usage", style="dim", no_wrap=True)
        table.add_column("Description")

        for category in CommandCategory:
            commands = app.command_registry.by_category(category)
            if not commands:
                continue
            table.add_row(f"[bold]{category.value.title()}[/bold]", "", "")
            for cmd in sorted(commands, key=lambda c: c.name):
                table.add_row(f"/{cmd.name}", escape(cmd.usage), cmd.description)
            if category is CommandCategory.LIST:
                table.add_row("<text>", "", "Add an item named <text>")
            table.add_row("", "", "")

        app.console.print(Panel(table, title="[bold]Commands[/bold]", border_style="cyan"))


class AddCommand(Command):
    """Add a new item dated now."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add an item",
            aliases=["a"],
            usage="/add <name>",
            examples=["/add Milk"],
            category=CommandCategory.LIST,
        )

    async def execute(self, args: str, app: Any) -> None:
        name = args.strip()
        if not name:
            app.show_error("Name required.")
            return
        app.store.add(Task.create(name))


class DoneCommand(Command):
    """Toggle an item's completion."""

    def __init__(self) -> None:
        super().__init__(
            name="done",
            description="Mark an item complete, or incomplete again",
            aliases=["d", "toggle"],
            usage="/done <section>.<row>",
            examples=["/done 1.2"],
            category=CommandCategory.LIST,
        )

    async def execute(self, args: str, app: Any) -> None:
        position = parse_position(args)
        if position is None:
            app.show_error(f"Usage: {self.usage}")
            return
        task = locate(app.store.grouped_tasks, *position)
        if task is None:
            app.show_error(f"No item at {args.strip()}.")
            return
        app.store.toggle_completion(task)


class RemoveCommand(Command):
    """Delete an item by position.

    With ``delete_mapping = "grouped"`` the position is section.row as
    shown on screen. With ``"flat"`` it is the 1-based index into the
    ungrouped list.
    """

    def __init__(self) -> None:
        super().__init__(
            name="rm",
            description="Delete an item (by list index with flat delete mapping)",
            aliases=["remove", "del"],
            usage="/rm <section>.<row> | <index>",
            examples=["/rm 2.1", "/rm 3"],
            category=CommandCategory.LIST,
        )

    async def execute(self, args: str, app: Any) -> None:
        if app.settings.delete_mapping == "flat":
            index = parse_index(args)
            if index is None:
                app.show_error("Usage: /rm <index>")
                return
            removed = app.store.remove_at(index)
        else:
            position = parse_position(args)
            if position is None:
                app.show_error("Usage: /rm <section>.<row>")
                return
            removed = app.store.remove_in_section(*position)
        if not removed:
            app.show_error(f"No item at {args.strip()}.")


class ClearCommand(Command):
    """Remove every item."""

    def __init__(self) -> None:
        super().__init__(
            name="clear",
            description="Clear all items",
            category=CommandCategory.LIST,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.store.clear()


class FoldCommand(Command):
    """Collapse or expand a day section."""

    def __init__(self) -> None:
        super().__init__(
            name="fold",
            description="Collapse or expand a day section",
            aliases=["f"],
            usage="/fold <section>",
            examples=["/fold 2"],
            category=CommandCategory.LIST,
        )

    async def execute(self, args: str, app: Any) -> None:
        index = parse_index(args)
        if index is None or not 0 <= index < len(app.store.grouped_tasks):
            app.show_error(f"Usage: {self.usage}")
            return
        app.toggle_section(index)


class ExitCommand(Command):
    """Exit the application."""

    def __init__(self) -> None:
        super().__init__(
            name="exit",
            description="Exit the application",
            aliases=["quit", "q"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.stop()


BUILTIN_COMMANDS: tuple[type[Command], ...] = (
    HelpCommand,
    AddCommand,
    DoneCommand,
    RemoveCommand,
    ClearCommand,
    FoldCommand,
    ExitCommand,
)
