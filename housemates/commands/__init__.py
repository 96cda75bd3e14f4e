"""Command parsing and dispatch package."""

from housemates.commands.dispatcher import CLEAR_TOKEN, OUTPUT_TOKENS, CommandDispatcher
from housemates.commands.parser import (
    CommandArgumentError,
    CommandError,
    CommandParser,
    UnknownCommandError,
)

__all__ = [
    "CLEAR_TOKEN",
    "OUTPUT_TOKENS",
    "CommandArgumentError",
    "CommandDispatcher",
    "CommandError",
    "CommandParser",
    "UnknownCommandError",
]
