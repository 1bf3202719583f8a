"""Resolved reward outputs ready to be applied to a kill."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True, slots=True)
class ItemReward:
    """An item stack to append to the drop list."""

    material: str
    amount: int


@dataclass(frozen=True, slots=True)
class CommandReward:
    """A batch of commands dispatched in order."""

    commands: Tuple[str, ...]
    as_console: bool = True


RewardOutput = Union[ItemReward, CommandReward]

__all__ = ["CommandReward", "ItemReward", "RewardOutput"]
