"""Coarse color harmony helper for deterministic outfit scoring."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Tuple

from models.taxonomy import normalize_color_name

logger = logging.getLogger(__name__)

HARMONIC_PAIRS: Tuple[FrozenSet[str], ...] = (
    frozenset({"black", "white"}),
    frozenset({"navy", "white"}),
    frozenset({"gray", "black"}),
    frozenset({"brown", "cream"}),
    frozenset({"blue", "gray"}),
)

HARMONIC_SCORE = 1.0
NEUTRAL_SCORE = 0.7


@dataclass(frozen=True)
class HarmonyResult:
    """Represents the outcome of a harmony evaluation."""

    score: float
    compared_colors: List[str]
    rule_used: str


def _leading_colors(colors: Iterable[str]) -> List[str]:
    # positional: a blank color still occupies one of the two slots
    return [normalize_color_name(color or "") for color in list(colors)[:2]]


class ColorHarmonyEvaluator:
    """Checks the leading colors of an outfit against known harmonic pairs.

    Only the first two colors are compared and anything outside the table
    scores a neutral 0.7. This is a lookup, not a color-distance model.
    """

    def __init__(self, pairs: Iterable[FrozenSet[str]] = HARMONIC_PAIRS) -> None:
        self.pairs = tuple(frozenset(pair) for pair in pairs)

    def evaluate(self, colors: Iterable[str]) -> HarmonyResult:
        leading = _leading_colors(colors)
        leading_set = set(leading)
        for pair in self.pairs:
            if leading_set and leading_set.issubset(pair):
                logger.debug("harmonic pair %s matched %s", sorted(pair), leading)
                return HarmonyResult(score=HARMONIC_SCORE, compared_colors=leading, rule_used="harmonic-pair")
        logger.debug("no harmonic pair for %s", leading)
        return HarmonyResult(score=NEUTRAL_SCORE, compared_colors=leading, rule_used="neutral")

    def harmony(self, colors: Iterable[str]) -> float:
        """Return the harmony score in [0, 1]."""

        return self.evaluate(colors).score


__all__ = ["ColorHarmonyEvaluator", "HarmonyResult", "HARMONIC_PAIRS", "HARMONIC_SCORE", "NEUTRAL_SCORE"]
