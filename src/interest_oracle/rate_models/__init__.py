"""Rate model registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain import RateModelKind
from .base import BaseRateModel
from .fixed import FixedRateModel
from .polynomial import PolynomialRateModel, RatePoint

if TYPE_CHECKING:
    from ..settings import OracleSettings

RATE_MODELS: dict[RateModelKind, type[BaseRateModel]] = {
    RateModelKind.COMPOUND: PolynomialRateModel,
    RateModelKind.SIMPLE: FixedRateModel,
}


def get_rate_model(config: OracleSettings) -> BaseRateModel:
    """Instantiate the rate model selected by ``config.model``."""
    return RATE_MODELS[config.model](config)


__all__ = [
    "BaseRateModel",
    "FixedRateModel",
    "PolynomialRateModel",
    "RATE_MODELS",
    "RatePoint",
    "get_rate_model",
]
