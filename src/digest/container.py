#!/usr/bin/env python3
"""
Dependency Injection Container

Central place where commands get their configuration and stores from, so
tests can swap in their own instances.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Simple dependency injection container with lifecycle management."""

    def __init__(self):
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Callable[[], T]) -> None:
        """Register a service created once and reused."""
        with self._lock:
            self._factories[service_name] = factory
            self._singletons.pop(service_name, None)

    def register_instance(self, service_name: str, instance: T) -> None:
        """Register an existing instance as singleton."""
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        if service_name in self._singletons:
            return self._singletons[service_name]

        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        with self._lock:
            if service_name not in self._singletons:
                self._singletons[service_name] = self._factories[service_name]()
                logger.debug(f"Created singleton instance for '{service_name}'")
            return self._singletons[service_name]

    def clear(self) -> None:
        with self._lock:
            self._factories.clear()
            self._singletons.clear()


_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                _setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def _setup_default_services(container: Container) -> None:
    """Set up default service registrations with configuration injection."""

    def create_config():
        from .config import get_config
        return get_config()

    def create_snapshot_store():
        from .storage.snapshot_store import SnapshotStore
        return SnapshotStore(container.get('config').storage.output_dir)

    def create_status_store():
        from .storage.status_store import ReviewStatusStore
        return ReviewStatusStore(container.get('config').storage.status_file)

    container.register_singleton('config', create_config)
    container.register_singleton('snapshot_store', create_snapshot_store)
    container.register_singleton('status_store', create_status_store)

    logger.debug("Default services registered in container")
