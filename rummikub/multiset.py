from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from .tiles import Tile


def _validate_counts(counts: Dict[Tile, int]) -> None:
    if any(not isinstance(tile, Tile) for tile in counts):
        raise ValueError("multiset keys must be tiles")
    if any(c < 0 for c in counts.values()):
        raise ValueError("multiset counts must be non-negative")


@dataclass
class TileMultiset:
    counts: Dict[Tile, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _validate_counts(self.counts)
        self.counts = {tile: c for tile, c in self.counts.items() if c}

    @classmethod
    def empty(cls) -> "TileMultiset":
        return cls({})

    @classmethod
    def from_iterable(cls, tiles: Iterable[Tile]) -> "TileMultiset":
        return cls(dict(Counter(tiles)))

    def to_compact(self) -> List[Tuple[Tile, int]]:
        return sorted(self.counts.items(), key=lambda item: item[0].sort_key())

    def elements(self) -> List[Tile]:
        return [tile for tile, count in self.to_compact() for _ in range(count)]

    def add(self, other: "TileMultiset") -> "TileMultiset":
        merged = Counter(self.counts)
        merged.update(other.counts)
        return TileMultiset(dict(merged))

    def sub(self, other: "TileMultiset") -> "TileMultiset":
        if not self.contains(other):
            raise ValueError("cannot subtract: negative counts")
        return TileMultiset({tile: c - other.counts.get(tile, 0) for tile, c in self.counts.items()})

    def contains(self, other: "TileMultiset") -> bool:
        return all(self.counts.get(tile, 0) >= c for tile, c in other.counts.items())

    def total(self) -> int:
        return sum(self.counts.values())

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.elements())

    def __len__(self) -> int:
        return self.total()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TileMultiset) and self.counts == other.counts
