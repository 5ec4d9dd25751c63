# core/shuffle.py
from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Sequence

from core.models import TrackRecord

logger = logging.getLogger(__name__)


class EmptyPlayOrderError(Exception):
    """advance()/current() called with no candidate tracks."""


def fisher_yates(items: list, rng: random.Random) -> list:
    """In-place unbiased shuffle; returns the same list."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


class ShuffleScheduler:
    """
    Shuffled play order over the candidate pool plus a cursor.

    The order is rebuilt wholesale on every reshuffle and again whenever the
    cursor runs off the end, so each cycle gets a fresh permutation.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._pool: list[TrackRecord] = []
        self._order: list[TrackRecord] = []
        self._cursor = 0
        self.generation = 0  # bumped on each rebuild

    @property
    def order(self) -> list[TrackRecord]:
        return list(self._order)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._order)

    def is_empty(self) -> bool:
        return not self._order

    def reshuffle(self, pool: Iterable[TrackRecord], keep: TrackRecord | None = None) -> list[TrackRecord]:
        self._pool = list(pool)
        order = fisher_yates(list(self._pool), self._rng)

        if keep is not None:
            idx = _index_of(order, keep)
            if idx is not None:
                order[0], order[idx] = order[idx], order[0]

        self._order = order
        self._cursor = 0
        self.generation += 1
        logger.debug("Reshuffled %d track(s) (generation %d)", len(order), self.generation)
        return list(order)

    def current(self) -> TrackRecord:
        if not self._order:
            raise EmptyPlayOrderError("play order is empty")
        return self._order[self._cursor]

    def advance(self) -> TrackRecord:
        if not self._order:
            raise EmptyPlayOrderError("play order is empty")

        nxt = self._cursor + 1
        if nxt >= len(self._order):
            logger.info("Reached end of play order; reshuffling %d track(s)", len(self._pool))
            self.reshuffle(self._pool)
        else:
            self._cursor = nxt
        return self._order[self._cursor]


def _index_of(order: Sequence[TrackRecord], track: TrackRecord) -> int | None:
    for i, t in enumerate(order):
        if t is track:
            return i
    return None
