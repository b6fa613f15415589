"""Application state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .settings import OracleSettings
from .store import RegisterStore


@dataclass
class AppState:
    """Container for application-wide state and dependencies.

    Passed to the CLI commands to avoid global state and enable testing.
    """

    settings: OracleSettings
    logger: logging.Logger
    store: RegisterStore | None = None

    @property
    def store_required(self) -> RegisterStore:
        if self.store is None:
            raise RuntimeError(
                "Register store has not been loaded. Ensure load_store() is called before accessing this property."
            )
        return self.store

    def load_store(self) -> RegisterStore:
        self.store = RegisterStore.load(self.settings.state_file)
        return self.store

    def save_store(self) -> None:
        self.store_required.save(self.settings.state_file)
