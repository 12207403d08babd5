"""Rummikub arrangement solver and move enumerator."""

import logging

from .errors import HandTooLarge, InvalidTile
from .tiles import Color, Tile, parse_tile, parse_tiles
from .rules import DEFAULT_RULES, Ruleset
from .meld import Meld, MeldKind, can_extend, is_run, is_set
from .arrangement import Arrangement
from .solver import SearchStats, solve
from .moves import MoveKind, ScoredMove, best_move, enumerate_moves, rank_moves, score

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "HandTooLarge",
    "InvalidTile",
    "Color",
    "Tile",
    "parse_tile",
    "parse_tiles",
    "DEFAULT_RULES",
    "Ruleset",
    "Meld",
    "MeldKind",
    "can_extend",
    "is_run",
    "is_set",
    "Arrangement",
    "SearchStats",
    "solve",
    "MoveKind",
    "ScoredMove",
    "best_move",
    "enumerate_moves",
    "rank_moves",
    "score",
]
