from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidTile
from .tiles import MAX_RANK, PLAYABLE_COLORS, Color, Tile

EXECUTORS = ("process", "thread")


@dataclass(frozen=True)
class Ruleset:
    colors: int = 4
    values: int = 13
    min_group_size: int = 3
    min_real_tiles: int = 2
    copies_per_tiletype: int = 2
    num_jokers: int = 2
    max_hand_size: int = 16
    workers: int = 1
    executor: str = "process"
    pass_score: int = -1
    joker_score: int = 0

    def __post_init__(self) -> None:
        if not 1 <= self.colors <= len(PLAYABLE_COLORS):
            raise ValueError(f"colors must be between 1 and {len(PLAYABLE_COLORS)}")
        if not 1 <= self.values <= MAX_RANK:
            raise ValueError(f"values must be between 1 and {MAX_RANK}")
        if self.min_group_size < 1:
            raise ValueError("min_group_size must be positive")
        if not 1 <= self.min_real_tiles <= self.min_group_size:
            raise ValueError("min_real_tiles must be between 1 and min_group_size")
        if self.copies_per_tiletype < 0 or self.num_jokers < 0:
            raise ValueError("deck counts must be non-negative")
        if self.max_hand_size < 0:
            raise ValueError("max_hand_size must be non-negative")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}")

    def playable_colors(self) -> Tuple[Color, ...]:
        return PLAYABLE_COLORS[: self.colors]

    def check_tile(self, tile: object) -> Tile:
        if not isinstance(tile, Tile):
            raise InvalidTile(f"expected a Tile, got {tile!r}")
        if tile.is_joker():
            return tile
        if tile.color not in self.playable_colors():
            raise InvalidTile(f"color {tile.color} not in play")
        if tile.rank > self.values:
            raise InvalidTile(f"rank {tile.rank} above {self.values}")
        return tile

    def deck_size(self) -> int:
        normal_tiles = self.colors * self.values * self.copies_per_tiletype
        return normal_tiles + self.num_jokers


DEFAULT_RULES = Ruleset()
