"""Single-layer associative memory that learns to predict move outcomes.

An input key is a small set of active features (bias, chosen direction,
current cell). Each (input feature, output feature) pair carries a signed
weight in a sparse table. Summing the weights of the active inputs scores
every output feature; the prediction keeps the best-scoring next cell and
any other output feature with a positive score.

Learning is a symmetric correction: outputs predicted but not observed are
pushed down, outputs observed but not predicted are pushed up, each by the
learning rate under every active input. A weight that reaches zero is
dropped, and a correction never flips a weight's sign.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from maze_memory.config.constants import LEARNING_RATE, WEIGHT_ZERO_TOLERANCE
from maze_memory.domain.grid import DIRECTION_ORDER, Direction


class FeatureKind(Enum):
    BIAS = "bias"
    DIRECTION = "direction"
    POSITION = "position"
    NEXT_POSITION = "next_position"
    COLLISION = "collision"


class Feature(NamedTuple):
    """Typed feature identifier; ``value`` is a cell or direction index."""

    kind: FeatureKind
    value: int = 0


FeatureKey = frozenset[Feature]

BIAS_FEATURE = Feature(FeatureKind.BIAS)
COLLISION_FEATURE = Feature(FeatureKind.COLLISION)


def input_key(cell: int, direction: Direction) -> FeatureKey:
    """Active input features for attempting *direction* from flat cell index *cell*."""
    return frozenset(
        {
            BIAS_FEATURE,
            Feature(FeatureKind.DIRECTION, DIRECTION_ORDER.index(direction)),
            Feature(FeatureKind.POSITION, cell),
        }
    )


def outcome_key(cell: int, blocked: bool) -> FeatureKey:
    """Observed output features: where the agent ended up, plus a bump flag."""
    features = {Feature(FeatureKind.NEXT_POSITION, cell)}
    if blocked:
        features.add(COLLISION_FEATURE)
    return frozenset(features)


def predicted_cell(key: FeatureKey) -> int | None:
    """Cell index named by the key's next-position feature, if any."""
    for feature in key:
        if feature.kind is FeatureKind.NEXT_POSITION:
            return feature.value
    return None


@dataclass
class WeightTable:
    """Sparse (input feature, output feature) -> weight map."""

    learning_rate: float = LEARNING_RATE
    weights: dict[tuple[Feature, Feature], float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.learning_rate > 0.0:
            raise ValueError("learning_rate must be > 0")

    def __len__(self) -> int:
        return len(self.weights)

    def weight(self, source: Feature, target: Feature) -> float:
        return self.weights.get((source, target), 0.0)

    def scores(self, key: FeatureKey) -> dict[Feature, float]:
        """Summed weight per output feature over the active inputs in *key*."""
        totals: dict[Feature, float] = {}
        for (source, target), value in self.weights.items():
            if source in key:
                totals[target] = totals.get(target, 0.0) + value
        return totals

    def predict(self, key: FeatureKey) -> FeatureKey:
        totals = self.scores(key)
        predicted: set[Feature] = set()
        positions = [f for f in totals if f.kind is FeatureKind.NEXT_POSITION]
        if positions:
            predicted.add(min(positions, key=lambda f: (-totals[f], f.value)))
        predicted.update(
            f
            for f, score in totals.items()
            if f.kind is not FeatureKind.NEXT_POSITION and score > 0
        )
        return frozenset(predicted)

    def update(self, key: FeatureKey, predicted: FeatureKey, actual: FeatureKey) -> int:
        """Correct weights toward *actual*; return the number of weights touched."""
        touched = 0
        for target in predicted - actual:
            for source in key:
                self._adjust(source, target, -self.learning_rate)
                touched += 1
        for target in actual - predicted:
            for source in key:
                self._adjust(source, target, self.learning_rate)
                touched += 1
        return touched

    def _adjust(self, source: Feature, target: Feature, delta: float) -> None:
        pair = (source, target)
        old = self.weights.get(pair, 0.0)
        new = old + delta
        crossed = old != 0.0 and (old > 0.0) != (new > 0.0)
        if crossed or math.isclose(new, 0.0, abs_tol=WEIGHT_ZERO_TOLERANCE):
            self.weights.pop(pair, None)
        else:
            self.weights[pair] = new
