"""Room template catalog: door-opening category -> interchangeable variants.

Categories keep their fixed template indices so layouts stored by index
stay readable:

    0 SIDES              left + right
    1 SIDES_BOTTOM       left + right + bottom
    2 SIDES_TOP          left + right + top
    3 SIDES_TOP_BOTTOM   all four (vertical corridor piece)

Catalog files are JSON:

    {"categories": {"SIDES": ["lr_hall", ...], ...}, "filler": ["solid_rock"]}
"""
from __future__ import annotations

import enum
import json
from pathlib import Path
from typing import Dict, Iterable, Mapping, Tuple

from .errors import ConfigurationError, EmptyCategory


class RoomCategory(enum.IntEnum):
    SIDES = 0
    SIDES_BOTTOM = 1
    SIDES_TOP = 2
    SIDES_TOP_BOTTOM = 3

    @property
    def has_top(self) -> bool:
        return self in (RoomCategory.SIDES_TOP, RoomCategory.SIDES_TOP_BOTTOM)

    @property
    def has_bottom(self) -> bool:
        return self in (RoomCategory.SIDES_BOTTOM, RoomCategory.SIDES_TOP_BOTTOM)

    @property
    def glyph(self) -> str:
        return "=v^#"[self.value]


TOP_OPENING = (RoomCategory.SIDES_TOP, RoomCategory.SIDES_TOP_BOTTOM)

DEFAULT_VARIANTS: Dict[RoomCategory, Tuple[str, ...]] = {
    RoomCategory.SIDES: ("lr_hall", "lr_pillars", "lr_pit"),
    RoomCategory.SIDES_BOTTOM: ("lrb_drop", "lrb_ledge"),
    RoomCategory.SIDES_TOP: ("lrt_ladder", "lrt_arch"),
    RoomCategory.SIDES_TOP_BOTTOM: ("lrtb_shaft", "lrtb_cross"),
}
DEFAULT_FILLER: Tuple[str, ...] = ("solid_rock",)


def _category_from_key(key) -> RoomCategory:
    if isinstance(key, RoomCategory):
        return key
    if isinstance(key, int) or (isinstance(key, str) and key.isdigit()):
        try:
            return RoomCategory(int(key))
        except ValueError as exc:
            raise ConfigurationError(f"unknown room category index {key!r}") from exc
    try:
        return RoomCategory[str(key).upper()]
    except KeyError as exc:
        raise ConfigurationError(f"unknown room category {key!r}") from exc


class RoomTemplateCatalog:
    """Read-only catalog; safe to share across generation runs."""

    def __init__(self, variants: Mapping, filler: Iterable[str] = ()):
        table: Dict[RoomCategory, Tuple[str, ...]] = {c: () for c in RoomCategory}
        for key, names in variants.items():
            table[_category_from_key(key)] = tuple(names)
        self._variants = table
        self._filler = tuple(filler)

    @classmethod
    def default(cls) -> "RoomTemplateCatalog":
        return cls(DEFAULT_VARIANTS, DEFAULT_FILLER)

    @classmethod
    def from_dict(cls, data: Mapping) -> "RoomTemplateCatalog":
        if not isinstance(data, Mapping) or not isinstance(data.get("categories"), Mapping):
            raise ConfigurationError("catalog must be an object with a 'categories' object")
        return cls(data["categories"], data.get("filler") or ())

    @classmethod
    def from_json(cls, path) -> "RoomTemplateCatalog":
        try:
            with open(Path(path), "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"cannot load room catalog {path}: {exc}") from exc
        return cls.from_dict(data)

    @property
    def categories(self) -> Tuple[RoomCategory, ...]:
        return tuple(RoomCategory)

    @property
    def filler(self) -> Tuple[str, ...]:
        return self._filler

    def get_variants(self, category: RoomCategory) -> Tuple[str, ...]:
        variants = self._variants.get(RoomCategory(category), ())
        if not variants:
            raise EmptyCategory(RoomCategory(category))
        return variants

    def pick_variant(self, category: RoomCategory, rng) -> str:
        return rng.choice(self.get_variants(category))

    def validate(self) -> "RoomTemplateCatalog":
        for category in RoomCategory:
            self.get_variants(category)
        return self

    def to_dict(self):
        return {
            "categories": {c.name: list(v) for c, v in self._variants.items()},
            "filler": list(self._filler),
        }


__all__ = [
    "RoomCategory",
    "RoomTemplateCatalog",
    "TOP_OPENING",
    "DEFAULT_VARIANTS",
    "DEFAULT_FILLER",
]
