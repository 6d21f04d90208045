"""Bookmark commands exposed to editor hosts."""

from .builtin import CommandError, CommandHandler, build_command_table

__all__ = ["CommandError", "CommandHandler", "build_command_table"]
