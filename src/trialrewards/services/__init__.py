"""Service layer exports."""

from .reward_applier import (
    CommandDispatchedEvent,
    CommandSink,
    ItemDroppedEvent,
    RewardEvent,
    apply_rewards,
)
from .reward_builder import RewardBuilder, apply_placeholders, resolve_amount
from .reward_rolls import evaluate_list, evaluate_pool, pick_weighted
from .reward_service import RewardService, resolve_tier

__all__ = [
    "CommandDispatchedEvent",
    "CommandSink",
    "ItemDroppedEvent",
    "RewardBuilder",
    "RewardEvent",
    "RewardService",
    "apply_placeholders",
    "apply_rewards",
    "evaluate_list",
    "evaluate_pool",
    "pick_weighted",
    "resolve_amount",
    "resolve_tier",
]
