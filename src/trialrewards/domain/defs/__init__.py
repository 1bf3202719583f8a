"""Domain definition exports."""

from .reward_def import (
    DEFAULT_ALLOWED_VANILLA_DROPS,
    AmountSpec,
    PerEntityOverrideDef,
    RewardConfigDef,
    RewardDef,
    RewardPoolDef,
    RewardSettingsDef,
    RewardSourceDef,
    TierDef,
)

__all__ = [
    "DEFAULT_ALLOWED_VANILLA_DROPS",
    "AmountSpec",
    "PerEntityOverrideDef",
    "RewardConfigDef",
    "RewardDef",
    "RewardPoolDef",
    "RewardSettingsDef",
    "RewardSourceDef",
    "TierDef",
]
