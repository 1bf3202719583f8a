"""Shared type aliases for the core and domain layers."""
from typing import Literal

PickMode = Literal["WEIGHTED", "ALL"]
RewardKind = Literal["ITEM", "COMMAND"]

DEFAULT_TIER = "DEFAULT"

__all__ = ["DEFAULT_TIER", "PickMode", "RewardKind"]
