from __future__ import annotations

from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from itertools import repeat
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .arrangement import Arrangement
from .errors import HandTooLarge
from .multiset import TileMultiset
from .rules import DEFAULT_RULES, Ruleset
from .solver import is_solvable, solve
from .tiles import Tile, sorted_tiles

logger = logging.getLogger(__name__)

Move = Tuple[Tile, ...]
Board = Union[Sequence[Tile], TileMultiset, Arrangement]


class MoveKind(str, Enum):
    PASS = "PASS"
    PLAY = "PLAY"


@dataclass(frozen=True)
class ScoredMove:
    tiles: Move
    score: int

    @property
    def kind(self) -> MoveKind:
        return MoveKind.PLAY if self.tiles else MoveKind.PASS


def _board_tiles(board: Board) -> List[Tile]:
    if isinstance(board, Arrangement):
        return list(board.tiles())
    if isinstance(board, TileMultiset):
        return board.elements()
    return list(board)


def iter_subsets(hand: Sequence[Tile]) -> Iterator[Move]:
    """Every subset of ``hand`` in bitmask order; bit ``i`` selects ``hand[i]``."""
    for mask in range(1 << len(hand)):
        yield tuple(tile for i, tile in enumerate(hand) if mask & (1 << i))


def _make_executor(ruleset: Ruleset) -> Executor:
    if ruleset.executor == "thread":
        return ThreadPoolExecutor(max_workers=ruleset.workers)
    return ProcessPoolExecutor(max_workers=ruleset.workers)


def _evaluate(jobs: List[Move], ruleset: Ruleset) -> List[bool]:
    if ruleset.workers == 1 or len(jobs) <= 1:
        return [is_solvable(job, ruleset) for job in jobs]
    chunksize = max(1, len(jobs) // (ruleset.workers * 4))
    with _make_executor(ruleset) as executor:
        return list(executor.map(is_solvable, jobs, repeat(ruleset), chunksize=chunksize))


def enumerate_moves(
    hand: Sequence[Tile],
    board: Board = (),
    ruleset: Ruleset | None = None,
    distinct: bool = False,
) -> List[Move]:
    """Return every subset of ``hand`` that leaves ``board`` plus the subset fully arrangeable.

    The empty tuple is the pass move. ``board`` is assumed to be empty or
    already arrangeable; this is not checked. With ``distinct`` set, subsets
    that repeat an earlier one tile-for-tile (duplicate tiles in hand) are
    dropped.
    """
    ruleset = ruleset or DEFAULT_RULES
    hand_tiles = [ruleset.check_tile(tile) for tile in hand]
    if len(hand_tiles) > ruleset.max_hand_size:
        raise HandTooLarge(
            f"hand of {len(hand_tiles)} tiles exceeds max_hand_size={ruleset.max_hand_size}"
        )
    board_tiles = tuple(ruleset.check_tile(tile) for tile in _board_tiles(board))

    candidates: List[Move] = []
    keys: List[Move] = []
    unique: Dict[Move, int] = {}
    for subset in iter_subsets(hand_tiles):
        key = sorted_tiles(subset)
        if key in unique and distinct:
            continue
        unique.setdefault(key, len(unique))
        candidates.append(subset)
        keys.append(key)

    jobs = [board_tiles + key for key in unique]
    results = _evaluate(jobs, ruleset)
    moves = [subset for subset, key in zip(candidates, keys) if results[unique[key]]]
    logger.info(
        "enumerate_moves: hand=%d board=%d candidates=%d solves=%d legal=%d workers=%d",
        len(hand_tiles),
        len(board_tiles),
        len(candidates),
        len(jobs),
        len(moves),
        ruleset.workers,
    )
    return moves


def score(move: Sequence[Tile], ruleset: Ruleset | None = None) -> int:
    ruleset = ruleset or DEFAULT_RULES
    if not move:
        return ruleset.pass_score
    return sum(ruleset.joker_score if tile.is_joker() else tile.rank for tile in move)


def rank_moves(moves: Iterable[Sequence[Tile]], ruleset: Ruleset | None = None) -> List[ScoredMove]:
    scored = [ScoredMove(tuple(move), score(move, ruleset)) for move in moves]
    return sorted(scored, key=lambda m: m.score, reverse=True)


def best_move(moves: Iterable[Sequence[Tile]], ruleset: Ruleset | None = None) -> Optional[ScoredMove]:
    best: Optional[ScoredMove] = None
    for move in moves:
        candidate = ScoredMove(tuple(move), score(move, ruleset))
        if best is None or candidate.score > best.score:
            best = candidate
    return best


def is_legal_move(
    hand: Sequence[Tile], board: Board, move: Sequence[Tile], ruleset: Ruleset | None = None
) -> Tuple[bool, str]:
    if not TileMultiset.from_iterable(hand).contains(TileMultiset.from_iterable(move)):
        return False, "cannot play tiles not in hand"
    if not is_solvable(_board_tiles(board) + list(move), ruleset):
        return False, "board plus played tiles cannot be arranged"
    return True, ""


def apply_move(board: Board, move: Sequence[Tile], ruleset: Ruleset | None = None) -> Arrangement:
    """Play ``move`` onto ``board`` and return the rearranged board."""
    arrangement = solve(_board_tiles(board) + list(move), ruleset)
    if arrangement is None:
        raise ValueError("illegal move: board plus played tiles cannot be arranged")
    return arrangement
