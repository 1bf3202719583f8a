"""Material lookup used when materializing item rewards."""
from __future__ import annotations

from typing import Iterable, Protocol


class MaterialCatalog(Protocol):
    """Resolves a material identifier to its canonical form, or ``None``."""

    def resolve(self, name: str) -> str | None:
        ...


class MaterialSet:
    """Catalog backed by a fixed set of upper-case material identifiers."""

    def __init__(self, materials: Iterable[str]) -> None:
        self._materials = frozenset(material.upper() for material in materials)

    def resolve(self, name: str) -> str | None:
        key = name.upper()
        return key if key in self._materials else None
