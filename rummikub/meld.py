from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .rules import DEFAULT_RULES, Ruleset
from .tiles import Color, Tile, sorted_tiles


class MeldKind(str, Enum):
    RUN = "RUN"
    SET = "SET"


def _split(group: Sequence[Tile]) -> Tuple[List[Tile], int]:
    real = [tile for tile in group if not tile.is_joker()]
    return real, len(group) - len(real)


def is_set(group: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> bool:
    """Same rank, pairwise-distinct colors; jokers fill the missing colors."""
    real, _ = _split(group)
    if len(group) < ruleset.min_group_size or len(group) > ruleset.colors:
        return False
    if len(real) < ruleset.min_real_tiles:
        return False
    if len({tile.rank for tile in real}) != 1:
        return False
    return len({tile.color for tile in real}) == len(real)


def is_run(group: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> bool:
    """Same color, distinct ranks; jokers bridge gaps and may extend either end."""
    real, jokers = _split(group)
    if len(group) < ruleset.min_group_size or len(group) > ruleset.values:
        return False
    if len(real) < ruleset.min_real_tiles:
        return False
    if len({tile.color for tile in real}) != 1:
        return False
    ranks = sorted(tile.rank for tile in real)
    if len(set(ranks)) != len(ranks):
        return False
    missing = sum(max(0, high - low - 1) for low, high in zip(ranks, ranks[1:]))
    return missing <= jokers


def is_valid_group(group: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> bool:
    return is_set(group, ruleset) or is_run(group, ruleset)


def can_extend(tile: Tile, group: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> bool:
    return is_valid_group(tuple(group) + (tile,), ruleset)


def classify(group: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULES) -> Optional[MeldKind]:
    if is_run(group, ruleset):
        return MeldKind.RUN
    if is_set(group, ruleset):
        return MeldKind.SET
    return None


@dataclass(frozen=True)
class Meld:
    kind: MeldKind
    tiles: Tuple[Tile, ...]

    def canonicalize(self) -> "Meld":
        return Meld(self.kind, sorted_tiles(self.tiles))

    def is_valid(self, ruleset: Ruleset = DEFAULT_RULES) -> Tuple[bool, str]:
        if len(self.tiles) < ruleset.min_group_size:
            return False, "meld too short"
        actual = classify(self.tiles, ruleset)
        if actual is None:
            return False, "tiles form neither a set nor a run"
        if actual != self.kind:
            return False, f"tiles form a {actual.value}, not a {self.kind.value}"
        return True, ""

    def signature(self) -> Tuple:
        return (self.kind.value, sorted_tiles(self.tiles))

    def points(self, ruleset: Ruleset = DEFAULT_RULES) -> int:
        return sum(ruleset.joker_score if tile.is_joker() else tile.rank for tile in self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile], ruleset: Ruleset = DEFAULT_RULES) -> "Meld":
        group = tuple(tiles)
        kind = classify(group, ruleset)
        if kind is None:
            raise ValueError(f"not a valid meld: {', '.join(str(t) for t in group)}")
        return cls(kind, group)

    @classmethod
    def from_effective_run(cls, color: Color, start: int, length: int) -> "Meld":
        return cls(MeldKind.RUN, tuple(Tile(color, start + i) for i in range(length)))

    @classmethod
    def from_effective_set(cls, rank: int, colors: Iterable[Color]) -> "Meld":
        return cls(MeldKind.SET, tuple(Tile(color, rank) for color in colors))
