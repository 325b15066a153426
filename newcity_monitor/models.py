"""Flavor data types shared by the scraper, the cache and the report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple


@dataclass(frozen=True)
class Item:
    """One flavor on the menu.

    `attribute_codes` holds the raw allergen tags printed next to the flavor
    (e.g. "E" for egg), in page order.
    """
    name: str
    description: str = ""
    attribute_codes: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence (lists from JSON) but always store a tuple.
        object.__setattr__(self, "attribute_codes", tuple(self.attribute_codes or ()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "attribute_codes": list(self.attribute_codes),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        """Build an Item from a cache record.

        Both the current keys and the legacy `Name`/`Description`/`RawDetails`
        keys are understood; a null code list means "no codes".
        """
        name = data.get("name", data.get("Name"))
        if not isinstance(name, str) or not name:
            raise ValueError(f"flavor record has no name: {data!r}")
        description = data.get("description", data.get("Description")) or ""
        if not isinstance(description, str):
            raise ValueError(f"flavor {name!r} has a non-string description")
        codes = data.get("attribute_codes", data.get("RawDetails")) or []
        if not isinstance(codes, list) or not all(isinstance(c, str) for c in codes):
            raise ValueError(f"flavor {name!r} has invalid attribute codes")
        return cls(name=name, description=description, attribute_codes=tuple(codes))


# Menu section title -> flavors in display order.
Snapshot = Dict[str, List[Item]]


def snapshot_to_dict(snapshot: Mapping[str, List[Item]]) -> Dict[str, List[Dict[str, Any]]]:
    return {category: [it.to_dict() for it in items] for category, items in snapshot.items()}


def snapshot_from_dict(data: Any) -> Snapshot:
    if not isinstance(data, dict):
        raise ValueError("snapshot must be a JSON object of category -> flavor list")
    out: Snapshot = {}
    for category, items in data.items():
        if not isinstance(items, list):
            raise ValueError(f"category {category!r} is not a list")
        if not all(isinstance(it, dict) for it in items):
            raise ValueError(f"category {category!r} contains a non-object entry")
        out[category] = [Item.from_dict(it) for it in items]
    return out


__all__ = ["Item", "Snapshot", "snapshot_to_dict", "snapshot_from_dict"]
