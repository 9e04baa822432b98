#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability.
"""

import logging
from abc import ABC, abstractmethod
from argparse import Namespace
from datetime import datetime
from typing import List, Optional

import pytz

from digest.container import get_container
from digest.exceptions import DigestError, NavigationError, StorageError

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Provides configuration, stores and error handling that all commands
    can use, resolved through the dependency injection container.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def snapshot_store(self):
        """Get snapshot store from container."""
        return self._container.get('snapshot_store')

    @property
    def status_store(self):
        """Get review status store from container."""
        return self._container.get('status_store')

    def today(self) -> str:
        """Today's date in the target timezone."""
        return datetime.now(pytz.utc).astimezone(self.config.filters.tz).date().isoformat()

    def resolve_date(self, args: Namespace) -> str:
        value: Optional[str] = getattr(args, 'date', None)
        return value or self.today()

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def get_available_subcommands(self) -> List[str]:
        """Public methods other than the base plumbing."""
        methods = []
        for attr_name in dir(self):
            if attr_name.startswith('_'):
                continue
            if attr_name in ('execute', 'get_available_subcommands', 'handle_error',
                             'today', 'resolve_date', 'config', 'snapshot_store', 'status_store', 'logger'):
                continue
            if callable(getattr(type(self), attr_name, None)):
                methods.append(attr_name)
        return methods

    def handle_error(self, error: Exception, context: str = "") -> int:
        """
        Standard error handling for commands.

        Returns:
            Appropriate exit code
        """
        error_msg = f"{context}: {error}" if context else str(error)

        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130

        if isinstance(error, DigestError):
            self.logger.error(error_msg)
            self.logger.debug(f"Error details: {error.to_dict()}")
        else:
            self.logger.error(error_msg, exc_info=True)

        if isinstance(error, FileNotFoundError):
            return 2
        elif isinstance(error, PermissionError):
            return 13
        elif isinstance(error, ValueError):
            return 22
        elif isinstance(error, (NavigationError, StorageError)):
            return 3
        else:
            return 1
