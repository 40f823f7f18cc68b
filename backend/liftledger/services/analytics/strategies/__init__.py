"""
Modality-specific calculation strategies.

Each strategy owns parsing, totals and PR candidates for one exercise
modality. Lookup goes through ``get_strategy`` so that every modality is
handled in exactly one place.
"""
from typing import Dict

from liftledger.models.day import Modality
from liftledger.services.analytics.strategies.base import MeasurementTotals, ModalityStrategy
from liftledger.services.analytics.strategies.calisthenics import CalisthenicsStrategy
from liftledger.services.analytics.strategies.cardio import CardioStrategy
from liftledger.services.analytics.strategies.strength import StrengthStrategy

# Strategy registry
_STRATEGIES: Dict[Modality, ModalityStrategy] = {
    Modality.STRENGTH: StrengthStrategy(),
    Modality.CARDIO: CardioStrategy(),
    Modality.CALISTHENICS: CalisthenicsStrategy(),
}

_missing = set(Modality) - set(_STRATEGIES)
if _missing:
    raise RuntimeError(
        "No analytics strategy registered for modality: "
        + ", ".join(sorted(m.value for m in _missing))
    )


def get_strategy(modality: Modality) -> ModalityStrategy:
    """
    Get the strategy for a modality.

    Raises:
        ValueError: If ``modality`` is not a known Modality value
    """
    return _STRATEGIES[Modality(modality)]


__all__ = [
    "MeasurementTotals",
    "ModalityStrategy",
    "CalisthenicsStrategy",
    "CardioStrategy",
    "StrengthStrategy",
    "get_strategy",
]
