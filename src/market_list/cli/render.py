"""Rich rendering of the grouped task list."""

from datetime import date

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from market_list.tasks import Task, day_key, day_label

TITLE = "Market List"


def task_row(task: Task) -> tuple[Text, Text]:
    """Check mark and name cells for one task."""
    if task.is_completed:
        return Text("✔", style="green"), Text(task.name, style="strike dim")
    return Text("○"), Text(task.name)


def render_section(
    section: int,
    bucket: list[Task],
    folded: bool = False,
    today: date | None = None,
) -> RenderableType:
    """One day section. Rows are numbered section.row, both 1-based."""
    label = day_label(day_key(bucket[0].date), today=today)
    if folded:
        label = f"{label} ({len(bucket)} hidden)"
    # header sits outside the table; a table title wraps to the table width
    header = Text(label, style="bold cyan", no_wrap=True, overflow="ellipsis")
    if folded:
        return header

    table = Table(show_header=False, box=None, padding=(0, 1, 0, 0))
    table.add_column("Pos", style="dim", no_wrap=True)
    table.add_column("Done", no_wrap=True)
    table.add_column("Name")
    for row, task in enumerate(bucket, start=1):
        mark, name = task_row(task)
        table.add_row(f"{section + 1}.{row}", mark, name)
    return Group(header, table)


def render_list(
    grouped: list[list[Task]],
    folded: set[int] | None = None,
    today: date | None = None,
) -> RenderableType:
    """The whole screen: every day section inside a titled panel."""
    folded = folded or set()
    if not grouped:
        body: RenderableType = Text("No items yet. Type a name to add one.", style="dim")
    else:
        body = Group(
            *(
                render_section(index, bucket, index in folded, today=today)
                for index, bucket in enumerate(grouped)
            )
        )
    return Panel(body, title=f"[bold]{TITLE}[/bold]", border_style="cyan")
