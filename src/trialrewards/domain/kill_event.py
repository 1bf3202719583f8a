"""Kill event records supplied by the host and the context rewards are built in."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union
from uuid import UUID

from trialrewards.domain.rewards import ItemReward


@dataclass(frozen=True, slots=True)
class PlayerRef:
    """The player credited with a kill."""

    name: str
    unique_id: UUID


@dataclass(frozen=True, slots=True)
class ConsoleSender:
    name: str = "CONSOLE"


CONSOLE = ConsoleSender()

CommandSender = Union[ConsoleSender, PlayerRef]


@dataclass(frozen=True, slots=True)
class BlockLocation:
    """World name plus block-aligned coordinates."""

    world: str
    x: int
    y: int
    z: int


@dataclass(slots=True)
class KillEvent:
    """A single entity death delivered by the host."""

    entity_type: str
    killer: PlayerRef | None = None
    tier_tag: str | None = None
    location: BlockLocation | None = None
    trial_spawned: bool = True
    drops: List[ItemReward] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RewardContext:
    """Per-kill values used for per-entity lookup and placeholder substitution."""

    entity_type: str
    tier: str
    killer: PlayerRef | None = None
    location: BlockLocation | None = None
