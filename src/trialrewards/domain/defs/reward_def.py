"""Reward table definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from trialrewards.core.types import PickMode, RewardKind

DEFAULT_ALLOWED_VANILLA_DROPS: Tuple[str, ...] = ("BREEZE_ROD", "ROTTEN_FLESH", "BONE", "ARROW")


@dataclass(frozen=True, slots=True)
class AmountSpec:
    """How many units an item reward grants.

    ``fixed`` wins when set; otherwise a uniform draw in ``[min_amount, max_amount]``.
    """

    fixed: int | None = None
    min_amount: int = 1
    max_amount: int = 1


@dataclass(frozen=True, slots=True)
class RewardDef:
    """A single item or command reward parsed from configuration."""

    kind: RewardKind
    chance: float = 1.0
    weight: float = 1.0
    material: str | None = None
    amount: AmountSpec = field(default_factory=AmountSpec)
    commands: Tuple[str, ...] = ()
    as_console: bool = True


@dataclass(frozen=True, slots=True)
class RewardPoolDef:
    """A reward sub-table evaluated through repeated rolls."""

    entries: Tuple[RewardDef, ...]
    rolls: int = 1
    unique: bool = False
    pick: PickMode = "WEIGHTED"


@dataclass(frozen=True, slots=True)
class PerEntityOverrideDef:
    """Extra rewards for one entity type; ``legacy`` marks the flat list shape."""

    rewards: Tuple[RewardDef, ...] = ()
    pools: Tuple[RewardPoolDef, ...] = ()
    legacy: bool = False


@dataclass(frozen=True, slots=True)
class RewardSourceDef:
    rewards: Tuple[RewardDef, ...] = ()
    pools: Tuple[RewardPoolDef, ...] = ()
    per_entity: Mapping[str, PerEntityOverrideDef] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True, slots=True)
class TierDef:
    name: str
    source: RewardSourceDef
    replace_global: bool = False


@dataclass(frozen=True, slots=True)
class RewardSettingsDef:
    """Top-level switches for extra rewards on trial spawner kills."""

    enabled: bool = False
    replace_default_drops: bool = False
    max_items_per_kill: int = -1
    allowed_vanilla_drops: Tuple[str, ...] = DEFAULT_ALLOWED_VANILLA_DROPS


@dataclass(frozen=True, slots=True)
class RewardConfigDef:
    """Everything the resolver reads: settings, the global source and tier table."""

    settings: RewardSettingsDef = field(default_factory=RewardSettingsDef)
    global_source: RewardSourceDef = field(default_factory=RewardSourceDef)
    tiers: Mapping[str, TierDef] = field(default_factory=lambda: MappingProxyType({}))

    def tier(self, name: str) -> TierDef | None:
        return self.tiers.get(name.upper())
