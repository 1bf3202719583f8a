"""Reward resolution for trial spawner kills."""
from __future__ import annotations

import logging
from typing import List

from trialrewards.core.rng import RandomSource
from trialrewards.core.types import DEFAULT_TIER
from trialrewards.domain.defs import RewardConfigDef, RewardDef, RewardSourceDef
from trialrewards.domain.kill_event import KillEvent, RewardContext
from trialrewards.domain.materials import MaterialCatalog
from trialrewards.domain.rewards import RewardOutput
from trialrewards.services.reward_applier import CommandSink, RewardEvent, apply_rewards
from trialrewards.services.reward_builder import RewardBuilder
from trialrewards.services.reward_rolls import evaluate_list, evaluate_pool

logger = logging.getLogger(__name__)


def resolve_tier(tag: str | None) -> str:
    """Return the canonical tier name for a raw tier tag."""
    if tag is None or not tag.strip():
        return DEFAULT_TIER
    return tag.upper()


class RewardService:
    """Gathers, rolls and applies extra rewards for tagged kills."""

    def __init__(
        self,
        *,
        config: RewardConfigDef,
        rng: RandomSource,
        material_catalog: MaterialCatalog,
        command_sink: CommandSink,
        log: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._rng = rng
        self._command_sink = command_sink
        self._builder = RewardBuilder(rng=rng, material_catalog=material_catalog, log=log or logger)

    @property
    def config(self) -> RewardConfigDef:
        return self._config

    # ------------------------------------------------------------------ Kills
    def handle_kill(self, event: KillEvent) -> List[RewardEvent]:
        if not event.trial_spawned:
            return []
        settings = self._config.settings
        allowed = set(settings.allowed_vanilla_drops)
        event.drops[:] = [drop for drop in event.drops if drop.material.upper() in allowed]
        if not settings.enabled:
            return []
        if settings.replace_default_drops:
            event.drops.clear()
        outputs = self.resolve(self.context_for(event))
        return apply_rewards(event, outputs, settings.max_items_per_kill, self._command_sink)

    def context_for(self, event: KillEvent) -> RewardContext:
        return RewardContext(
            entity_type=event.entity_type,
            tier=resolve_tier(event.tier_tag),
            killer=event.killer,
            location=event.location,
        )

    # ------------------------------------------------------------- Resolution
    def resolve(self, context: RewardContext) -> List[RewardOutput]:
        """Global outputs, then tier outputs; a replace-global tier drops the former."""
        outputs = self.gather(self._config.global_source, context)
        tier = self._config.tier(context.tier)
        if tier is not None:
            if tier.replace_global:
                outputs.clear()
            outputs.extend(self.gather(tier.source, context))
        return outputs

    def gather(self, source: RewardSourceDef, context: RewardContext) -> List[RewardOutput]:
        def build(definition: RewardDef) -> RewardOutput | None:
            return self._builder.build(definition, context)

        outputs = evaluate_list(source.rewards, self._rng, build)
        for pool in source.pools:
            outputs.extend(evaluate_pool(pool, self._rng, build))

        override = source.per_entity.get(context.entity_type)
        if override is None:
            return outputs
        outputs.extend(evaluate_list(override.rewards, self._rng, build))
        for pool in override.pools:
            outputs.extend(evaluate_pool(pool, self._rng, build))
        return outputs
