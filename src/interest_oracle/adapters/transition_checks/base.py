"""Base class for transition checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from ...domain import Transition
from ...errors import TransitionRejected

if TYPE_CHECKING:
    from ...settings import OracleSettings


@dataclass
class CheckResult:
    """Result from a transition check."""

    passed: bool
    message: str
    error: type[TransitionRejected] | None = None


class BaseTransitionCheck(ABC):
    """Base class for all transition checks.

    Checks report rule violations through ``CheckResult``; they do not raise.
    """

    error: ClassVar[type[TransitionRejected]] = TransitionRejected

    def __init__(self, config: OracleSettings):
        """Initialize the check with configuration."""
        self.config = config

    @abstractmethod
    def run_check(self, transition: Transition) -> CheckResult:
        """Judge the transition and return result."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this check."""
        pass

    def _passed(self, message: str) -> CheckResult:
        return CheckResult(passed=True, message=message)

    def _failed(self, message: str) -> CheckResult:
        return CheckResult(passed=False, message=message, error=self.error)
