"""Applies resolved rewards to a kill: capped item drops, then commands."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Protocol, Sequence

from trialrewards.domain.kill_event import CONSOLE, CommandSender, KillEvent
from trialrewards.domain.rewards import CommandReward, ItemReward, RewardOutput


class CommandSink(Protocol):
    """Executes a command on behalf of a sender; the outcome is not reported back."""

    def dispatch(self, sender: CommandSender, command: str) -> None:
        ...


@dataclass(slots=True)
class RewardEvent:
    """Base class for reward application events."""


@dataclass(slots=True)
class ItemDroppedEvent(RewardEvent):
    material: str
    amount: int
    truncated: bool = False


@dataclass(slots=True)
class CommandDispatchedEvent(RewardEvent):
    sender: CommandSender
    command: str


def apply_rewards(
    event: KillEvent,
    outputs: Sequence[RewardOutput],
    cap: int,
    sink: CommandSink,
) -> List[RewardEvent]:
    """
    Append item outputs to the drop list, then dispatch every command output.

    A cap <= 0 leaves items uncapped. Commands are never capped.
    """

    events: List[RewardEvent] = []
    added_units = 0
    for output in outputs:
        if not isinstance(output, ItemReward):
            continue
        if cap > 0 and added_units >= cap:
            break
        to_add = output
        truncated = False
        if cap > 0:
            remaining = cap - added_units
            if to_add.amount > remaining:
                to_add = replace(to_add, amount=remaining)
                truncated = True
        if to_add.amount > 0:
            event.drops.append(to_add)
            added_units += to_add.amount
            events.append(
                ItemDroppedEvent(material=to_add.material, amount=to_add.amount, truncated=truncated)
            )

    for output in outputs:
        if not isinstance(output, CommandReward) or not output.commands:
            continue
        sender = _resolve_sender(output, event)
        for command in output.commands:
            final_command = command.strip()
            if not final_command:
                continue
            sink.dispatch(sender, final_command)
            events.append(CommandDispatchedEvent(sender=sender, command=final_command))
    return events


def _resolve_sender(output: CommandReward, event: KillEvent) -> CommandSender:
    if output.as_console or event.killer is None:
        return CONSOLE
    return event.killer
