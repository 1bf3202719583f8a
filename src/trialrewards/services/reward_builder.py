"""Turns chosen reward definitions into concrete reward outputs."""
from __future__ import annotations

import logging

from trialrewards.core.rng import RandomSource
from trialrewards.domain.defs import AmountSpec, RewardDef
from trialrewards.domain.kill_event import RewardContext
from trialrewards.domain.materials import MaterialCatalog
from trialrewards.domain.rewards import CommandReward, ItemReward, RewardOutput

logger = logging.getLogger(__name__)


def resolve_amount(spec: AmountSpec, rng: RandomSource) -> int:
    """
    Return the number of units to grant.

    Fixed amounts are used verbatim. Ranges clamp negative bounds to 0 and
    raise ``max`` to ``min``; no draw happens when the bounds are equal.
    """

    if spec.fixed is not None:
        return spec.fixed
    low = max(spec.min_amount, 0)
    high = max(spec.max_amount, 0)
    if high < low:
        high = low
    if low == high:
        return low
    return rng.randint(low, high)


def apply_placeholders(command: str, context: RewardContext) -> str:
    text = command
    if context.killer is not None:
        text = text.replace("%player%", context.killer.name)
        text = text.replace("%uuid%", str(context.killer.unique_id))
    text = text.replace("%entity%", context.entity_type)
    text = text.replace("%tier%", context.tier)
    if context.location is not None:
        text = text.replace("%world%", context.location.world)
        text = text.replace("%x%", str(context.location.x))
        text = text.replace("%y%", str(context.location.y))
        text = text.replace("%z%", str(context.location.z))
    if text.startswith("/"):
        text = text[1:]
    return text


class RewardBuilder:
    """Materializes reward definitions for a single kill."""

    def __init__(
        self,
        *,
        rng: RandomSource,
        material_catalog: MaterialCatalog,
        log: logging.Logger | None = None,
    ) -> None:
        self._rng = rng
        self._material_catalog = material_catalog
        self._log = log or logger

    def build(self, definition: RewardDef, context: RewardContext) -> RewardOutput | None:
        if definition.kind == "COMMAND":
            return self._build_command(definition, context)
        return self._build_item(definition)

    def _build_command(self, definition: RewardDef, context: RewardContext) -> CommandReward | None:
        if not definition.commands:
            return None
        rendered = tuple(apply_placeholders(command, context) for command in definition.commands)
        return CommandReward(commands=rendered, as_console=definition.as_console)

    def _build_item(self, definition: RewardDef) -> ItemReward | None:
        if definition.material is None:
            return None
        material = self._material_catalog.resolve(definition.material)
        if material is None:
            self._log.warning("Invalid extra-reward material: %s", definition.material)
            return None
        amount = resolve_amount(definition.amount, self._rng)
        if amount <= 0:
            return None
        return ItemReward(material=material, amount=amount)
