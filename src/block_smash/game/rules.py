from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np


logger = logging.getLogger(__name__)


@dataclass
class ScoringRules:
    line_clear_scores: Tuple[int, int, int, int] = (40, 100, 300, 1200)
    tier_names: Tuple[str, str, str, str] = ("single", "double", "triple", "tetris")
    max_group: int = 4

    def __post_init__(self) -> None:
        if len(self.line_clear_scores) != self.max_group or len(self.tier_names) != self.max_group:
            raise ValueError("scoring tables must have one entry per group size")

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return self.line_clear_scores[min(lines, self.max_group) - 1]

    def tier_for_lines(self, lines: int) -> str:
        return self.tier_names[min(lines, self.max_group) - 1]


@dataclass(frozen=True)
class ClearEvent:
    name: str
    rows: Tuple[int, ...]
    points: int


@dataclass
class SmashResult:
    events: List[ClearEvent] = field(default_factory=list)
    points: int = 0

    def __bool__(self) -> bool:
        return bool(self.events)

    @property
    def rows(self) -> List[int]:
        return [row for event in self.events for row in event.rows]


def complete_rows(grid) -> List[int]:
    """Indices of rows, top to bottom, whose every cell is occupied."""
    cells = np.asarray(grid)
    return [int(r) for r in np.flatnonzero(np.all(cells != 0, axis=1))]


def group_rows(rows: Sequence[int], max_group: int = 4) -> List[List[int]]:
    """Split sorted row indices into consecutive runs of at most `max_group`.

    A run that would grow past `max_group` is closed and the next row starts
    a new group, so six stacked rows score as a tetris plus a double.
    """
    groups: List[List[int]] = []
    for row in rows:
        if groups and row == groups[-1][-1] + 1 and len(groups[-1]) < max_group:
            groups[-1].append(row)
        else:
            groups.append([row])
    return groups


def evaluate(grid, rules: ScoringRules | None = None) -> SmashResult:
    rules = rules or ScoringRules()
    rows = complete_rows(grid)
    result = SmashResult()
    if not rows:
        return result
    logger.info("Smashing lines: %s", rows)
    for group in group_rows(rows, rules.max_group):
        points = rules.score_for_lines(len(group))
        result.events.append(ClearEvent(rules.tier_for_lines(len(group)), tuple(group), points))
        result.points += points
    return result


def smash(grid: np.ndarray, result: SmashResult) -> np.ndarray:
    """Return `grid` without the smashed rows, padded with empty rows on top."""
    rows = sorted(set(result.rows))
    if not rows:
        return grid
    remaining = np.delete(grid, rows, axis=0)
    new_rows = np.zeros((len(rows), grid.shape[1]), dtype=grid.dtype)
    return np.vstack((new_rows, remaining))
