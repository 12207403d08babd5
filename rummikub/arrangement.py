from __future__ import annotations

from dataclasses import dataclass, field
import hashlib
from typing import Iterable, Iterator, List, Tuple

from .meld import Meld
from .multiset import TileMultiset
from .rules import DEFAULT_RULES, Ruleset
from .tiles import Tile


@dataclass
class Arrangement:
    melds: List[Meld] = field(default_factory=list)
    _multiset_cache: TileMultiset | None = field(default=None, init=False, repr=False, compare=False)

    def canonicalize(self) -> "Arrangement":
        canon_melds = []
        for m in self.melds:
            if not m.tiles:
                raise ValueError("meld cannot be empty")
            canon_melds.append(m.canonicalize())
        canon_melds.sort(key=lambda m: (m.kind.value, [t.sort_key() for t in m.tiles]))
        return Arrangement(canon_melds)

    def multiset(self) -> TileMultiset:
        if self._multiset_cache is None:
            self._multiset_cache = TileMultiset.from_iterable(self.tiles())
        return self._multiset_cache

    def canonical_key(self) -> Tuple:
        canon = self.canonicalize()
        return tuple(meld.signature() for meld in canon.melds)

    def stable_hash(self) -> str:
        key = self.canonical_key()
        return hashlib.sha256(repr(key).encode("utf-8")).hexdigest()

    def tiles(self) -> Iterable[Tile]:
        for meld in self.melds:
            for tile in meld.tiles:
                yield tile

    def is_valid(self, ruleset: Ruleset = DEFAULT_RULES) -> Tuple[bool, str]:
        for meld in self.melds:
            ok, reason = meld.is_valid(ruleset)
            if not ok:
                return False, f"invalid meld: {reason}"
        return True, ""

    def covers(self, tiles: Iterable[Tile]) -> bool:
        """True when the melds use exactly ``tiles``, each tile once."""
        return self.multiset() == TileMultiset.from_iterable(tiles)

    def __len__(self) -> int:
        return len(self.melds)

    def __iter__(self) -> Iterator[Meld]:
        return iter(self.melds)
