from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..domain import RateModelKind, TransitionContext, ValueRegister

if TYPE_CHECKING:
    from ..settings import OracleSettings


class BaseRateModel(ABC):
    """Abstract base class for interest accrual methodologies."""

    def __init__(self, config: OracleSettings):
        """Initialize the rate model with configuration."""
        self.config = config

    @property
    @abstractmethod
    def kind(self) -> RateModelKind:
        """Register flavour this model produces."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this rate model."""
        ...

    @abstractmethod
    def compute_update(
        self, state: ValueRegister, context: TransitionContext
    ) -> ValueRegister:
        """Compute the candidate successor of ``state``.

        Args:
            state: The live register
            context: Height and reference inputs of the transition

        Returns:
            The register the transition is expected to produce. Nothing is
            validated or committed here.
        """
        ...
