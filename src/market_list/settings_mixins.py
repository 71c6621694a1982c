"""Settings mixins for application identity, storage and CLI configuration.

AppSettingsMixin: Application identity and disk layout (app_name, workspace, paths).
StoreSettingsMixin: Task store slot and deletion mapping.
CLISettingsMixin: Logging settings for the terminal front end.

These live outside cli/ so that config.py can compose Settings
without importing the cli package.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Should be composed with BaseSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="market_list",
        title="App Name",
        description="Application name used for config directories",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".market_list",
        title="Workspace Directory",
        description="Directory holding the defaults file",
    )

    @field_validator("workspace_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @property
    def defaults_file(self) -> Path:
        """Key-value defaults file backing the task store."""
        return self.workspace_dir / "defaults.json"


class StoreSettingsMixin:
    """Settings for the task store."""

    tasks_key: str = Field(
        default="tasks",
        title="Tasks Key",
        description="Slot name the task list is saved under",
    )
    delete_mapping: Literal["grouped", "flat"] = Field(
        default="grouped",
        title="Delete Mapping",
        description=(
            "How a delete position is resolved: 'grouped' addresses a row within "
            "a day section, 'flat' addresses the ungrouped list index"
        ),
    )


class CLISettingsMixin:
    """Settings for CLI/UI configuration.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )
