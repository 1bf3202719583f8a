"""Parses the ``extra-rewards`` configuration section into reward definitions."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Tuple

from trialrewards.core.types import PickMode
from trialrewards.data.config_tree import (
    ConfigNode,
    ListNode,
    MappingNode,
    ScalarNode,
    as_int,
    as_text,
    to_node,
)
from trialrewards.data.errors import DataValidationError
from trialrewards.domain.defs import (
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

logger = logging.getLogger(__name__)

SECTION_KEY = "extra-rewards"


def load_reward_config(raw: object) -> RewardConfigDef:
    """Build a reward config from the plugin's whole parsed configuration."""
    root = to_node(raw)
    if not isinstance(root, MappingNode):
        raise DataValidationError("Reward configuration must be a mapping.")
    section = root.get_mapping(SECTION_KEY)
    if section is None:
        return RewardConfigDef()
    return parse_reward_section(section)


def parse_reward_section(section: MappingNode) -> RewardConfigDef:
    tiers: Dict[str, TierDef] = {}
    tiers_node = section.get_mapping("tiers")
    if tiers_node is not None:
        for tier_name, tier_node in tiers_node.items():
            if not isinstance(tier_node, MappingNode):
                logger.debug("Skipping tier %r: not a mapping", tier_name)
                continue
            key = tier_name.upper()
            if key in tiers:
                logger.debug("Skipping duplicate tier %r", tier_name)
                continue
            tiers[key] = TierDef(
                name=key,
                source=parse_source(tier_node),
                replace_global=tier_node.is_true("replace-global"),
            )
    return RewardConfigDef(
        settings=parse_settings(section),
        global_source=parse_source(section),
        tiers=MappingProxyType(tiers),
    )


def parse_settings(section: MappingNode) -> RewardSettingsDef:
    return RewardSettingsDef(
        enabled=section.is_true("enabled"),
        replace_default_drops=section.is_true("replace-default-drops"),
        max_items_per_kill=_normalize_cap(section.get_int("max-items-per-kill", -1)),
        allowed_vanilla_drops=_normalize_materials(section.get("allowed-vanilla-drops")),
    )


def _normalize_cap(value: int) -> int:
    # 0 reads as "no cap"
    return -1 if value == 0 else value


def _normalize_materials(node: ConfigNode | None) -> Tuple[str, ...]:
    if not isinstance(node, ListNode):
        return DEFAULT_ALLOWED_VANILLA_DROPS
    materials: List[str] = []
    for item in node:
        text = as_text(item)
        if text and text.strip():
            materials.append(text.strip().upper())
    return tuple(materials)


def parse_source(node: MappingNode) -> RewardSourceDef:
    per_entity: Dict[str, PerEntityOverrideDef] = {}
    per_entity_node = node.get_mapping("per-entity")
    if per_entity_node is not None:
        for entity_type, entity_node in per_entity_node.items():
            if isinstance(entity_node, ListNode):
                per_entity[entity_type] = PerEntityOverrideDef(
                    rewards=parse_reward_list(entity_node), legacy=True
                )
            elif isinstance(entity_node, MappingNode):
                per_entity[entity_type] = PerEntityOverrideDef(
                    rewards=parse_reward_list(entity_node.get_list("rewards")),
                    pools=parse_pools(entity_node.get_list("pools")),
                )
    return RewardSourceDef(
        rewards=parse_reward_list(node.get_list("rewards")),
        pools=parse_pools(node.get_list("pools")),
        per_entity=MappingProxyType(per_entity),
    )


def parse_reward_list(node: ListNode | None) -> Tuple[RewardDef, ...]:
    if node is None:
        return ()
    return tuple(parse_reward(entry) for entry in node.mappings())


def parse_pools(node: ListNode | None) -> Tuple[RewardPoolDef, ...]:
    if node is None:
        return ()
    pools: List[RewardPoolDef] = []
    for index, pool_node in enumerate(node.mappings()):
        entries = pool_node.get_list("entries")
        if entries is None:
            logger.debug("Skipping pool %d: entries is not a list", index)
            continue
        pools.append(
            RewardPoolDef(
                entries=parse_reward_list(entries),
                rolls=pool_node.get_int("rolls", 1),
                unique=pool_node.is_true("unique"),
                pick=parse_pick_mode(pool_node.get_text("pick")),
            )
        )
    return tuple(pools)


def parse_pick_mode(raw: str | None) -> PickMode:
    if raw is None:
        return "WEIGHTED"
    mode = raw.upper()
    if mode == "ALL":
        return "ALL"
    if mode != "WEIGHTED":
        logger.debug("Unknown pick mode %r, using WEIGHTED", raw)
    return "WEIGHTED"


def parse_reward(node: MappingNode) -> RewardDef:
    """Parse one reward entry; command fields win over item fields."""
    chance = node.get_float("chance", 1.0)
    weight = node.get_float("weight", 1.0)
    reward_type = node.get_text("type")
    looks_command = (
        (reward_type is not None and reward_type.upper() == "COMMAND")
        or "command" in node
        or "commands" in node
    )
    if looks_command:
        return RewardDef(
            kind="COMMAND",
            chance=chance,
            weight=weight,
            commands=_parse_commands(node),
            as_console=not (node.is_false("as-console") or node.is_false("asConsole")),
        )
    return RewardDef(
        kind="ITEM",
        chance=chance,
        weight=weight,
        material=node.get_text("material"),
        amount=parse_amount(node),
    )


def _parse_commands(node: MappingNode) -> Tuple[str, ...]:
    commands: List[str] = []
    single = node.get("command")
    if isinstance(single, ScalarNode) and isinstance(single.value, str):
        commands.append(single.value)
    multi = node.get_list("commands")
    if multi is not None:
        for item in multi:
            text = as_text(item)
            if text is not None:
                commands.append(text)
    return tuple(commands)


def parse_amount(node: MappingNode) -> AmountSpec:
    """Read ``amount: 3``, ``amount: {min, max}`` or ``min-amount``/``max-amount``."""
    amount = node.get("amount")
    if isinstance(amount, ScalarNode) and isinstance(amount.value, (int, float)) and not isinstance(
        amount.value, bool
    ):
        value = as_int(amount, 0)
        return AmountSpec(fixed=value, min_amount=value, max_amount=value)
    if isinstance(amount, MappingNode):
        low = amount.get_int("min", 1)
        return AmountSpec(min_amount=low, max_amount=amount.get_int("max", low))
    low = node.get_int("min-amount", 1)
    return AmountSpec(min_amount=low, max_amount=node.get_int("max-amount", low))
