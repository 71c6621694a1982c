"""Terminal front end for the market list."""

from market_list.cli.app import MarketListApp
from market_list.cli.commands import Command, CommandCategory, CommandRegistry

__all__ = ["MarketListApp", "Command", "CommandCategory", "CommandRegistry"]
