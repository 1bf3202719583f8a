"""Tagged configuration tree built from generic parsed maps, lists and scalars."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple, Union

Scalar = Union[str, int, float, bool, None]

_INT_PATTERN = re.compile(r"[+-]?\d+")


@dataclass(frozen=True, slots=True)
class ScalarNode:
    value: Scalar = None


@dataclass(frozen=True, slots=True)
class ListNode:
    items: Tuple["ConfigNode", ...] = ()

    def __iter__(self) -> Iterator["ConfigNode"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def mappings(self) -> list["MappingNode"]:
        """Return the mapping items, skipping anything else."""
        return [item for item in self.items if isinstance(item, MappingNode)]


@dataclass(frozen=True, slots=True)
class MappingNode:
    entries: Mapping[str, "ConfigNode"] = field(default_factory=lambda: MappingProxyType({}))

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def items(self) -> list[tuple[str, "ConfigNode"]]:
        return list(self.entries.items())

    def get(self, key: str) -> "ConfigNode | None":
        return self.entries.get(key)

    def get_path(self, path: str) -> "ConfigNode | None":
        """Follow a dotted path such as ``tiers.HARD`` through nested mappings."""
        node: ConfigNode | None = self
        for part in path.split("."):
            if not isinstance(node, MappingNode):
                return None
            node = node.get(part)
        return node

    def get_list(self, key: str) -> ListNode | None:
        node = self.get(key)
        return node if isinstance(node, ListNode) else None

    def get_mapping(self, key: str) -> "MappingNode | None":
        node = self.get(key)
        return node if isinstance(node, MappingNode) else None

    def get_float(self, key: str, default: float) -> float:
        return as_float(self.get(key), default)

    def get_int(self, key: str, default: int) -> int:
        return as_int(self.get(key), default)

    def get_text(self, key: str) -> str | None:
        return as_text(self.get(key))

    def is_true(self, key: str) -> bool:
        return is_true(self.get(key))

    def is_false(self, key: str) -> bool:
        return is_false(self.get(key))


ConfigNode = Union[ScalarNode, ListNode, MappingNode]


def to_node(raw: object) -> ConfigNode:
    """Convert generic parsed data (dicts, lists, scalars) into a config tree."""
    if isinstance(raw, (ScalarNode, ListNode, MappingNode)):
        return raw
    if isinstance(raw, Mapping):
        return MappingNode(
            entries=MappingProxyType({str(key): to_node(value) for key, value in raw.items()})
        )
    if isinstance(raw, (list, tuple)):
        return ListNode(items=tuple(to_node(item) for item in raw))
    if raw is None or isinstance(raw, (str, int, float, bool)):
        return ScalarNode(value=raw)
    return ScalarNode(value=str(raw))


def _scalar(node: ConfigNode | None) -> Scalar:
    if isinstance(node, ScalarNode):
        return node.value
    return None


def as_float(node: ConfigNode | None, default: float) -> float:
    """Read a number, parsing numeric strings; anything else yields ``default``."""
    value = _scalar(node)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        try:
            result = float(value)
        except ValueError:
            return default
    if math.isnan(result):
        return default
    return result


def as_int(node: ConfigNode | None, default: int) -> int:
    """Read an integer; floats truncate toward zero, integer strings parse."""
    value = _scalar(node)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    text = value.strip()
    if _INT_PATTERN.fullmatch(text):
        return int(text)
    return default


def as_text(node: ConfigNode | None) -> str | None:
    value = _scalar(node)
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_true(node: ConfigNode | None) -> bool:
    return _scalar(node) is True


def is_false(node: ConfigNode | None) -> bool:
    return _scalar(node) is False
