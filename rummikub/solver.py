"""Backtracking search for a full partition of tiles into valid melds.

State is passed by value: ``remaining`` is a tuple kept in canonical order
(real tiles ascending by rank, jokers last) and ``groups`` is a tuple of tile
tuples. The search always places the last remaining tile, so jokers are
placed first and real tiles by descending rank. With that order every meld of
a valid partition can be grown one tile at a time through valid intermediate
melds, which keeps the search complete. A run of two real tiles bridged by
two or more jokers has no valid seed of minimum size, so a joker may also
seed a meld together with any number of the jokers behind it.

Dead ends are cached per ``solve`` call in a negative memo keyed on the
canonical state.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
import logging
from typing import Iterable, List, Optional, Set, Tuple

from .arrangement import Arrangement
from .meld import Meld, can_extend, is_valid_group
from .rules import DEFAULT_RULES, Ruleset
from .tiles import Tile, sorted_tiles

logger = logging.getLogger(__name__)

Group = Tuple[Tile, ...]
StateKey = Tuple[Group, Tuple[Group, ...]]


@dataclass
class SearchStats:
    nodes: int = 0
    memo_hits: int = 0
    dead_ends: int = 0


def state_key(remaining: Iterable[Tile], groups: Iterable[Iterable[Tile]]) -> StateKey:
    """Order-independent key for a ``(remaining, partial groups)`` search state."""
    canon_groups = sorted(
        (sorted_tiles(group) for group in groups),
        key=lambda g: [t.sort_key() for t in g],
    )
    return sorted_tiles(remaining), tuple(canon_groups)


@dataclass
class _Search:
    ruleset: Ruleset
    stats: SearchStats

    def __post_init__(self) -> None:
        self.memo: Set[StateKey] = set()

    def run(self, remaining: Group, groups: Tuple[Group, ...]) -> Optional[Tuple[Group, ...]]:
        key = state_key(remaining, groups)
        if key in self.memo:
            self.stats.memo_hits += 1
            return None
        if not remaining:
            return groups
        self.stats.nodes += 1

        tile = remaining[-1]
        rest = remaining[:-1]

        found = self._extend(tile, rest, groups)
        if found is None:
            found = self._seed(tile, (), rest, groups, self.ruleset.min_group_size)
        if found is None and tile.is_joker():
            found = self._seed_with_jokers(tile, rest, groups)
        if found is not None:
            return found

        self.memo.add(key)
        self.stats.dead_ends += 1
        return None

    def _extend(self, tile: Tile, rest: Group, groups: Tuple[Group, ...]) -> Optional[Tuple[Group, ...]]:
        tried = set()
        for idx, group in enumerate(groups):
            canon = sorted_tiles(group)
            if canon in tried:
                continue
            tried.add(canon)
            if not can_extend(tile, group, self.ruleset):
                continue
            extended = groups[:idx] + (group + (tile,),) + groups[idx + 1 :]
            found = self.run(rest, extended)
            if found is not None:
                return found
        return None

    def _seed_with_jokers(
        self, joker: Tile, rest: Group, groups: Tuple[Group, ...]
    ) -> Optional[Tuple[Group, ...]]:
        """Seed a meld from ``joker``, one or more of the trailing jokers and real tiles."""
        extra = 0
        while extra < len(rest) and rest[-1 - extra].is_joker():
            extra += 1
            fixed = rest[len(rest) - extra :]
            found = self._seed(
                joker, fixed, rest[: len(rest) - extra], groups, self.ruleset.min_group_size + extra
            )
            if found is not None:
                return found
        return None

    def _seed(
        self, tile: Tile, fixed: Group, pool: Group, groups: Tuple[Group, ...], size: int
    ) -> Optional[Tuple[Group, ...]]:
        """Open a new meld of ``size`` tiles from ``tile``, ``fixed`` and tiles of ``pool``."""
        needed = size - 1 - len(fixed)
        if needed < 0 or needed > len(pool):
            return None
        tried = set()
        for picked in combinations(range(len(pool)), needed):
            partners = tuple(pool[i] for i in picked)
            if partners in tried:
                continue
            tried.add(partners)
            candidate = (tile,) + fixed + partners
            if not is_valid_group(candidate, self.ruleset):
                continue
            left = tuple(t for i, t in enumerate(pool) if i not in picked)
            found = self.run(left, groups + (candidate,))
            if found is not None:
                return found
        return None


def solve(
    tiles: Iterable[Tile],
    ruleset: Ruleset | None = None,
    stats: SearchStats | None = None,
) -> Optional[Arrangement]:
    """Partition ``tiles`` into valid sets and runs.

    Returns the first arrangement found, or ``None`` when no partition exists.
    Raises ``InvalidTile`` for anything that is not a tile of ``ruleset``.
    """
    ruleset = ruleset or DEFAULT_RULES
    stats = stats if stats is not None else SearchStats()
    checked: List[Tile] = [ruleset.check_tile(tile) for tile in tiles]

    groups = _Search(ruleset, stats).run(sorted_tiles(checked), ())
    logger.debug(
        "solve %d tiles: %s (nodes=%d memo_hits=%d dead_ends=%d)",
        len(checked),
        "found" if groups is not None else "none",
        stats.nodes,
        stats.memo_hits,
        stats.dead_ends,
    )
    if groups is None:
        return None
    return Arrangement([Meld.from_tiles(group, ruleset) for group in groups])


def is_solvable(tiles: Iterable[Tile], ruleset: Ruleset | None = None) -> bool:
    return solve(tiles, ruleset) is not None
