"""Terminal front end for the market list.

Renders the grouped list with rich and reads commands through a
prompt_toolkit session. Bare text adds an item; slash commands toggle,
delete, clear and fold sections. The screen is redrawn whenever the
task store reports a change.
"""

from __future__ import annotations

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from market_list.cli.builtin_commands import BUILTIN_COMMANDS
from market_list.cli.commands import CommandRegistry
from market_list.cli.render import render_list
from market_list.config import Settings, get_settings
from market_list.logging import Loggers, bind_context, configure_logging
from market_list.tasks import Task, TaskStore

logger = Loggers.cli()


class SlashCommandCompleter(Completer):
    """Completer that only triggers for slash commands."""

    def __init__(self, commands: list[str]) -> None:
        self.commands = sorted(commands)

    def get_completions(self, document: Document, complete_event):
        """Yield completions only when text starts with /."""
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        partial = text[1:].lower()
        for cmd in self.commands:
            if cmd.lower().startswith(partial):
                yield Completion(
                    text=f"/{cmd}",
                    start_position=-len(text),
                    display=f"/{cmd}",
                )


class MarketListApp:
    """The single-screen market list application.

    Args:
        settings: Settings override; defaults to get_settings().
        store: Task store override; defaults to the store backed by the
            configured defaults file.
        console: Rich console to draw on.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        store: TaskStore | None = None,
        console: Console | None = None,
    ) -> None:
        self._settings = settings if settings is not None else get_settings()
        configure_logging(self._settings)
        bind_context(tasks_key=self._settings.tasks_key)

        self.console = console or Console()
        # TaskStore defines __len__, so an empty injected store is falsy
        self.store = store if store is not None else TaskStore.from_settings(self._settings)
        self._unsubscribe = self.store.subscribe(self.render)

        self.command_registry = CommandRegistry()
        for command_cls in BUILTIN_COMMANDS:
            self.command_registry.register(command_cls())

        self.folded_sections: set[int] = set()
        self.should_exit = False

        logger.info(
            "app_initialized",
            tasks=len(self.store),
            delete_mapping=self._settings.delete_mapping,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def stop(self) -> None:
        """Stop the application."""
        self.should_exit = True

    # ---- output ----

    def render(self) -> None:
        """Draw the grouped list."""
        self.console.print(render_list(self.store.grouped_tasks, self.folded_sections))

    def show_message(self, text: str) -> None:
        self.console.print(text, style="dim", highlight=False, markup=False)

    def show_error(self, text: str) -> None:
        self.console.print(text, style="bold red", highlight=False, markup=False)

    def toggle_section(self, index: int) -> None:
        """Collapse a day section, or expand it if already collapsed."""
        if index in self.folded_sections:
            self.folded_sections.remove(index)
        else:
            self.folded_sections.add(index)
        self.render()

    # ---- input ----

    async def process_input(self, user_input: str) -> None:
        """Route one line of input: slash command, or an item name to add."""
        user_input = user_input.strip()
        if not user_input:
            return

        if user_input.startswith("/"):
            await self._handle_command(user_input)
        else:
            self.store.add(Task.create(user_input))

    async def _handle_command(self, user_input: str) -> None:
        parts = user_input[1:].split(maxsplit=1)
        command_name = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        command = self.command_registry.get(command_name)
        if command is None:
            self.show_error(f"Unknown command: /{command_name}")
            self.show_message("Type /help to see available commands")
            return

        logger.debug("executing_command", command=command.name, args=args)
        await command.execute(args, self)

    async def run(self) -> None:
        """Run the main application loop until /exit or Ctrl+D."""
        session: PromptSession[str] = PromptSession(
            history=InMemoryHistory(),
            completer=SlashCommandCompleter(self.command_registry.get_completions()),
            complete_while_typing=True,
        )
        self.render()
        while not self.should_exit:
            try:
                text = await session.prompt_async("New Item > ")
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            await self.process_input(text)

        self._unsubscribe()
        logger.info("app_ending", tasks=len(self.store))
        self.show_message("Goodbye!")
