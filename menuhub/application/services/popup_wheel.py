"""Reward wheel selection for the menu popup."""

import random
from collections.abc import Callable, Sequence

from menuhub.domain.entities import WheelReward
from menuhub.domain.exceptions import ValidationException


def normalized_chances(rewards: Sequence[WheelReward]) -> list[float]:
    """Scale chances so they sum to 100. All-zero chances are left as-is."""
    total = sum(r.chance for r in rewards)
    if total <= 0:
        return [float(r.chance) for r in rewards]
    return [r.chance / total * 100 for r in rewards]


def pick_wheel_reward(
    rewards: Sequence[WheelReward],
    rng: Callable[[], float] = random.random,
) -> WheelReward:
    """Pick a reward by cumulative normalized chance.

    rng returns a float in [0, 1). When no reward's cumulative chance covers
    the roll (all chances zero) the first reward wins.
    """
    if not rewards:
        raise ValidationException("Wheel has no rewards", field="wheel_rewards")
    roll = rng() * 100
    cumulative = 0.0
    for reward, chance in zip(rewards, normalized_chances(rewards)):
        cumulative += chance
        if roll <= cumulative:
            return reward
    return rewards[0]
