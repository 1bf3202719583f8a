"""Chance-gated reward lists and weighted reward pools."""
from __future__ import annotations

from typing import Callable, List, Sequence

from trialrewards.core.rng import RandomSource
from trialrewards.domain.defs import RewardDef, RewardPoolDef
from trialrewards.domain.rewards import RewardOutput

BuildFn = Callable[[RewardDef], "RewardOutput | None"]


def passes_chance(definition: RewardDef, rng: RandomSource) -> bool:
    """Roll a definition's own chance gate; non-positive chances never draw."""
    if definition.chance <= 0:
        return False
    return rng.random() <= min(definition.chance, 1.0)


def evaluate_list(
    definitions: Sequence[RewardDef],
    rng: RandomSource,
    build: BuildFn,
) -> List[RewardOutput]:
    outputs: List[RewardOutput] = []
    for definition in definitions:
        if not passes_chance(definition, rng):
            continue
        output = build(definition)
        if output is not None:
            outputs.append(output)
    return outputs


def pick_weighted(
    entries: Sequence[RewardDef],
    live: Sequence[int],
    rng: RandomSource,
) -> int | None:
    """
    Pick one of the ``live`` entry indices by weight.

    Returns the position within ``live``, or None when no live entry has a
    positive weight. Entries with weight <= 0 are never chosen directly.
    """

    total = 0.0
    for index in live:
        weight = entries[index].weight
        if weight > 0:
            total += weight
    if total <= 0:
        return None

    target = rng.random() * total
    upto = 0.0
    for position, index in enumerate(live):
        weight = entries[index].weight
        if weight <= 0:
            continue
        upto += weight
        if upto >= target:
            return position
    return len(live) - 1


def evaluate_pool(
    pool: RewardPoolDef,
    rng: RandomSource,
    build: BuildFn,
) -> List[RewardOutput]:
    if pool.rolls <= 0 or not pool.entries:
        return []
    if pool.pick == "ALL":
        return evaluate_list(pool.entries, rng, build)

    entries = pool.entries
    live = list(range(len(entries)))
    effective_rolls = min(pool.rolls, len(entries)) if pool.unique else pool.rolls
    outputs: List[RewardOutput] = []
    for _ in range(effective_rolls):
        position = pick_weighted(entries, live, rng)
        if position is None:
            break
        chosen = entries[live[position]]
        if passes_chance(chosen, rng):
            output = build(chosen)
            if output is not None:
                outputs.append(output)
        if pool.unique:
            # swap-remove
            live[position] = live[-1]
            live.pop()
    return outputs
