"""Application Context - process-level access to private storage.

Components that need persistent storage receive a context object instead of
reaching for global paths. Short-lived components (a screen, a worker) get a
``ComponentContext`` whose ``application_context`` points back at the one
``ApplicationContext`` of the process, so long-lived objects such as the
database never hold on to a short-lived owner.

Author: Michael Economou
Date: 2026-10-12
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sleeptracker.config import DATABASES_SUBDIR
from sleeptracker.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class ApplicationContext:
    """
    Process-level execution context.

    Resolves locations inside the application's private storage area.
    When ``data_dir`` is not given the platform user-data directory from
    ``AppPaths`` is used.
    """

    def __init__(self, data_dir: str | Path | None = None):
        if data_dir is None:
            from sleeptracker.utils.paths import AppPaths

            data_dir = AppPaths.get_user_data_dir()
        self._data_dir = Path(data_dir)

        logger.debug(
            "[ApplicationContext] Created with data dir: %s",
            self._data_dir,
            extra={"dev_only": True},
        )

    @property
    def application_context(self) -> ApplicationContext:
        return self

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def get_database_path(self, name: str) -> Path:
        """Return the absolute path of a named database, creating its directory.

        Args:
            name: Database file name (no directory components)

        Returns:
            Path under ``<data_dir>/databases/``

        """
        if not name or Path(name).name != name:
            raise ValueError(f"Invalid database name: {name!r}")

        databases_dir = self._data_dir / DATABASES_SUBDIR
        databases_dir.mkdir(parents=True, exist_ok=True)
        return databases_dir / name

    def __repr__(self) -> str:
        return f"ApplicationContext(data_dir={str(self._data_dir)!r})"


class ComponentContext:
    """Context of a short-lived component, bound to its application context."""

    def __init__(self, parent: ApplicationContext | ComponentContext, name: str = ""):
        if not is_valid_context(parent):
            raise ValueError("ComponentContext requires a valid parent context")
        self._application_context = parent.application_context
        self.name = name

    @property
    def application_context(self) -> ApplicationContext:
        return self._application_context

    def get_database_path(self, name: str) -> Path:
        return self._application_context.get_database_path(name)

    def __repr__(self) -> str:
        return f"ComponentContext(name={self.name!r})"


def is_valid_context(context: Any) -> bool:
    """Check that ``context`` can resolve storage through an application context."""
    if context is None:
        return False
    app_context = getattr(context, "application_context", None)
    return app_context is not None and callable(getattr(app_context, "get_database_path", None))
