from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Tuple

from .errors import InvalidTile

if TYPE_CHECKING:
    from .rules import Ruleset

MAX_RANK = 13
JOKER_RANK = 0


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"
    BLACK = "black"
    YELLOW = "yellow"
    JOKER = "joker"

    def __str__(self) -> str:
        return self.value


PLAYABLE_COLORS: Tuple[Color, ...] = (Color.RED, Color.BLUE, Color.BLACK, Color.YELLOW)

_COLOR_ORDER = {color: idx for idx, color in enumerate(PLAYABLE_COLORS + (Color.JOKER,))}
_SHORT_NAMES = {"R": Color.RED, "U": Color.BLUE, "K": Color.BLACK, "Y": Color.YELLOW}


@dataclass(frozen=True)
class Tile:
    color: Color
    rank: int = JOKER_RANK

    def __post_init__(self) -> None:
        try:
            color = Color(self.color)
        except ValueError:
            raise InvalidTile(f"unknown tile color {self.color!r}") from None
        object.__setattr__(self, "color", color)
        if color == Color.JOKER:
            object.__setattr__(self, "rank", JOKER_RANK)
            return
        if isinstance(self.rank, bool) or not isinstance(self.rank, int):
            raise InvalidTile(f"tile rank must be an integer, got {self.rank!r}")
        if not 1 <= self.rank <= MAX_RANK:
            raise InvalidTile(f"tile rank {self.rank} outside 1..{MAX_RANK}")

    @classmethod
    def joker(cls) -> "Tile":
        return cls(Color.JOKER)

    def is_joker(self) -> bool:
        return self.color == Color.JOKER

    def sort_key(self) -> Tuple[int, int]:
        """Real tiles by (rank, color); jokers after every real tile."""
        if self.is_joker():
            return (MAX_RANK + 1, _COLOR_ORDER[Color.JOKER])
        return (self.rank, _COLOR_ORDER[self.color])

    def __str__(self) -> str:
        if self.is_joker():
            return "joker"
        return f"{self.color} {self.rank}"


def sorted_tiles(tiles: Iterable[Tile]) -> Tuple[Tile, ...]:
    return tuple(sorted(tiles, key=Tile.sort_key))


def parse_tile(text: str) -> Tile:
    """Parse ``"red 7"``, ``"R7"`` or ``"joker"``/``"J"`` into a tile.

    Short color letters are R (red), U (blue), K (black) and Y (yellow).
    """
    raw = text.strip()
    if raw.lower() in ("j", "joker"):
        return Tile.joker()
    parts = raw.split()
    if len(parts) == 2:
        color_text, rank_text = parts
        try:
            color = Color(color_text.lower())
        except ValueError:
            raise InvalidTile(f"unknown tile color in {text!r}") from None
    elif len(parts) == 1 and len(raw) >= 2 and raw[0].upper() in _SHORT_NAMES:
        color = _SHORT_NAMES[raw[0].upper()]
        rank_text = raw[1:]
    else:
        raise InvalidTile(f"cannot parse tile {text!r}")
    try:
        rank = int(rank_text)
    except ValueError:
        raise InvalidTile(f"invalid rank in {text!r}") from None
    return Tile(color, rank)


def parse_tiles(text: str) -> List[Tile]:
    return [parse_tile(chunk) for chunk in text.split(",") if chunk.strip()]


def iter_full_deck(ruleset: "Ruleset") -> Iterable[Tile]:
    for _ in range(ruleset.copies_per_tiletype):
        for color in ruleset.playable_colors():
            for rank in range(1, ruleset.values + 1):
                yield Tile(color, rank)
    for _ in range(ruleset.num_jokers):
        yield Tile.joker()
