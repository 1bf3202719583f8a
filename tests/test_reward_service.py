from uuid import UUID

from tests.helpers.fakes import RecordingSink, SequenceRNG
from trialrewards.core.rng import RNG
from trialrewards.data.reward_config_loader import load_reward_config
from trialrewards.domain.kill_event import CONSOLE, BlockLocation, KillEvent, PlayerRef, RewardContext
from trialrewards.domain.materials import MaterialSet
from trialrewards.domain.rewards import CommandReward, ItemReward
from trialrewards.services.reward_applier import ItemDroppedEvent
from trialrewards.services.reward_service import RewardService, resolve_tier

_MATERIALS = MaterialSet(
    ["ARROW", "BONE", "ROTTEN_FLESH", "BREEZE_ROD", "DIAMOND", "EMERALD", "IRON_INGOT", "GOLD_INGOT"]
)
_KILLER = PlayerRef(name="Alex", unique_id=UUID("12345678-1234-5678-1234-567812345678"))


def _service(section: dict, rng=None, sink=None) -> RewardService:
    return RewardService(
        config=load_reward_config({"extra-rewards": section}),
        rng=rng or SequenceRNG(),
        material_catalog=_MATERIALS,
        command_sink=sink or RecordingSink(),
    )


def _context(entity_type: str = "ZOMBIE", tier: str = "DEFAULT") -> RewardContext:
    return RewardContext(entity_type=entity_type, tier=tier, killer=_KILLER)


def test_resolve_tier_defaults_and_uppercases() -> None:
    assert resolve_tier(None) == "DEFAULT"
    assert resolve_tier("") == "DEFAULT"
    assert resolve_tier("   ") == "DEFAULT"
    assert resolve_tier("hard") == "HARD"
    assert resolve_tier("Ominous") == "OMINOUS"


def test_gather_orders_rewards_pools_then_per_entity() -> None:
    service = _service(
        {
            "rewards": [{"material": "BONE"}],
            "pools": [{"entries": [{"material": "ARROW"}]}],
            "per-entity": {
                "ZOMBIE": {
                    "rewards": [{"material": "IRON_INGOT"}],
                    "pools": [{"entries": [{"material": "GOLD_INGOT"}]}],
                }
            },
        },
        rng=SequenceRNG(floats=[0.0] * 6),
    )

    outputs = service.gather(service.config.global_source, _context())

    assert [output.material for output in outputs] == ["BONE", "ARROW", "IRON_INGOT", "GOLD_INGOT"]


def test_gather_legacy_per_entity_list_and_other_entities() -> None:
    service = _service(
        {"per-entity": {"SKELETON": [{"material": "ARROW", "amount": 2}]}},
        rng=SequenceRNG(floats=[0.0]),
    )

    skeleton = service.gather(service.config.global_source, _context("SKELETON"))
    zombie = service.gather(service.config.global_source, _context("ZOMBIE"))

    assert skeleton == [ItemReward(material="ARROW", amount=2)]
    assert zombie == []


def test_gather_ignores_nested_per_entity() -> None:
    service = _service(
        {
            "per-entity": {
                "ZOMBIE": {
                    "rewards": [{"material": "BONE"}],
                    "per-entity": {"ZOMBIE": [{"material": "DIAMOND"}]},
                }
            }
        },
        rng=SequenceRNG(floats=[0.0]),
    )

    outputs = service.gather(service.config.global_source, _context())

    assert outputs == [ItemReward(material="BONE", amount=1)]


def test_tier_outputs_append_after_global() -> None:
    service = _service(
        {
            "rewards": [{"material": "BONE"}],
            "tiers": {"HARD": {"rewards": [{"material": "DIAMOND"}]}},
        },
        rng=SequenceRNG(floats=[0.0, 0.0]),
    )

    outputs = service.resolve(_context(tier="HARD"))

    assert [output.material for output in outputs] == ["BONE", "DIAMOND"]


def test_replace_global_tier_keeps_only_tier_outputs() -> None:
    service = _service(
        {
            "rewards": [{"material": "BONE"}, {"command": "say global"}],
            "tiers": {
                "HARD": {
                    "replace-global": True,
                    "rewards": [{"material": "EMERALD", "amount": 2}],
                    "per-entity": {"ZOMBIE": [{"command": "say %tier% %entity%"}]},
                }
            },
        },
        rng=SequenceRNG(floats=[0.0] * 4),
    )

    outputs = service.resolve(_context(tier="HARD"))

    assert outputs == [
        ItemReward(material="EMERALD", amount=2),
        CommandReward(commands=("say HARD ZOMBIE",)),
    ]


def test_unknown_tier_uses_global_only() -> None:
    service = _service(
        {"rewards": [{"material": "BONE"}], "tiers": {"HARD": {"rewards": [{"material": "DIAMOND"}]}}},
        rng=SequenceRNG(floats=[0.0]),
    )

    outputs = service.resolve(_context(tier="EXTREME"))

    assert outputs == [ItemReward(material="BONE", amount=1)]


def test_handle_kill_ignores_untagged_entities() -> None:
    service = _service({"enabled": True, "rewards": [{"material": "DIAMOND"}]})
    event = KillEvent(entity_type="ZOMBIE", trial_spawned=False, drops=[ItemReward("LEATHER", 2)])

    assert service.handle_kill(event) == []
    assert event.drops == [ItemReward("LEATHER", 2)]


def test_handle_kill_filters_vanilla_drops_even_when_disabled() -> None:
    service = _service({"rewards": [{"material": "DIAMOND"}]})
    event = KillEvent(
        entity_type="ZOMBIE",
        drops=[ItemReward("ROTTEN_FLESH", 2), ItemReward("IRON_INGOT", 1), ItemReward("bone", 1)],
    )

    assert service.handle_kill(event) == []
    assert event.drops == [ItemReward("ROTTEN_FLESH", 2), ItemReward("bone", 1)]


def test_handle_kill_applies_rewards_with_cap() -> None:
    service = _service(
        {
            "enabled": True,
            "max-items-per-kill": 2,
            "rewards": [{"material": "ARROW", "amount": 3, "chance": 1.0}],
        },
        rng=SequenceRNG(floats=[0.4]),
    )
    event = KillEvent(entity_type="SKELETON", drops=[ItemReward("BONE", 1)])

    events = service.handle_kill(event)

    assert event.drops == [ItemReward("BONE", 1), ItemReward("ARROW", 2)]
    assert events == [ItemDroppedEvent(material="ARROW", amount=2, truncated=True)]


def test_handle_kill_replace_default_drops_clears_first() -> None:
    service = _service(
        {"enabled": True, "replace-default-drops": True, "rewards": [{"material": "DIAMOND"}]},
        rng=SequenceRNG(floats=[0.0]),
    )
    event = KillEvent(entity_type="ZOMBIE", drops=[ItemReward("BONE", 3)])

    service.handle_kill(event)

    assert event.drops == [ItemReward("DIAMOND", 1)]


def test_handle_kill_dispatches_command_as_killer() -> None:
    sink = RecordingSink()
    service = _service(
        {"enabled": True, "rewards": [{"commands": ["say hi"], "as-console": False}]},
        rng=SequenceRNG(floats=[0.2]),
        sink=sink,
    )
    event = KillEvent(entity_type="ZOMBIE", killer=_KILLER)

    service.handle_kill(event)

    assert sink.dispatched == [(_KILLER, "say hi")]


def test_handle_kill_renders_context_placeholders() -> None:
    sink = RecordingSink()
    service = _service(
        {
            "enabled": True,
            "tiers": {
                "OMINOUS": {"rewards": [{"command": "/broadcast %player% cleared %tier% at %x% %y% %z% in %world%"}]}
            },
        },
        rng=SequenceRNG(floats=[0.0]),
        sink=sink,
    )
    event = KillEvent(
        entity_type="BREEZE",
        killer=_KILLER,
        tier_tag="ominous",
        location=BlockLocation(world="trial_world", x=10, y=-5, z=3),
    )

    service.handle_kill(event)

    assert sink.dispatched == [(CONSOLE, "broadcast Alex cleared OMINOUS at 10 -5 3 in trial_world")]


def test_handle_kill_survives_bad_materials_and_empty_pools() -> None:
    service = _service(
        {
            "enabled": True,
            "rewards": [{"material": "NOT_REAL"}, {"amount": 2}, {"material": "DIAMOND"}],
            "pools": [
                {"rolls": 3, "entries": [{"material": "EMERALD", "weight": 0}]},
                {"rolls": -1, "entries": [{"material": "EMERALD"}]},
            ],
        },
        rng=SequenceRNG(floats=[0.0, 0.0, 0.0]),
    )
    event = KillEvent(entity_type="ZOMBIE", drops=[])

    service.handle_kill(event)

    assert event.drops == [ItemReward("DIAMOND", 1)]


def test_cap_invariant_holds_for_seeded_runs() -> None:
    section = {
        "enabled": True,
        "replace-default-drops": True,
        "max-items-per-kill": 5,
        "rewards": [{"material": "ARROW", "amount": {"min": 1, "max": 4}, "chance": 0.8}],
        "pools": [
            {
                "rolls": 3,
                "unique": True,
                "entries": [
                    {"material": "BONE", "weight": 2, "min-amount": 1, "max-amount": 3},
                    {"material": "DIAMOND", "weight": 1, "chance": 0.5},
                    {"material": "EMERALD", "weight": 1, "amount": 2},
                ],
            }
        ],
    }
    for seed in range(50):
        service = _service(section, rng=RNG(seed))
        event = KillEvent(entity_type="ZOMBIE")

        service.handle_kill(event)

        assert sum(drop.amount for drop in event.drops) <= 5
        assert all(drop.amount > 0 for drop in event.drops)
