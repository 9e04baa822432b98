#!/usr/bin/env python3
"""
Command endpoints for the entertainment digest.

Each top-level command is handled by a dedicated command class.
"""

from typing import Dict, Type
from .base import BaseCommand
from .scrape import ScrapeCommand
from .snapshot import SnapshotCommand
from .review import ReviewCommand

# Command registry for easy extension
COMMANDS: Dict[str, Type[BaseCommand]] = {
    'scrape': ScrapeCommand,
    'snapshot': SnapshotCommand,
    'review': ReviewCommand,
}


def get_command(command_name: str, container=None) -> BaseCommand:
    """Get a command instance by name."""
    if command_name not in COMMANDS:
        available = ', '.join(COMMANDS.keys())
        raise ValueError(f"Unknown command '{command_name}'. Available: {available}")

    return COMMANDS[command_name](container)

