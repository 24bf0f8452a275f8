"""Dot decomposition for rendering a counter against its goal."""

from dataclasses import dataclass
from enum import StrEnum


class DotKind(StrEnum):
    """Visual state of a single dot."""

    FILLED = "filled"
    IN_PROGRESS = "in-progress"
    EMPTY = "empty"


@dataclass(frozen=True)
class DotSegment:
    """One rendered dot."""

    kind: DotKind
    excess: bool = False


@dataclass(frozen=True)
class DotDecomposition:
    """Disjoint dot counts for a counter row.

    ``confirmed_excess`` and ``pending_excess`` hold one flag per unit, in
    display order, marking units beyond the goal.
    """

    confirmed_filled: int
    pending_shown: int
    empty_remaining: int
    confirmed_excess: tuple[bool, ...]
    pending_excess: tuple[bool, ...]

    @property
    def total_shown(self) -> int:
        return self.confirmed_filled + self.pending_shown

    @property
    def excess_count(self) -> int:
        return sum(self.confirmed_excess) + sum(self.pending_excess)

    def segments(self) -> list[DotSegment]:
        """Return the dots in display order: filled, in-progress, empty."""
        dots = [DotSegment(DotKind.FILLED, flag) for flag in self.confirmed_excess]
        dots.extend(DotSegment(DotKind.IN_PROGRESS, flag) for flag in self.pending_excess)
        dots.extend(DotSegment(DotKind.EMPTY) for _ in range(self.empty_remaining))
        return dots


def decompose(count: int, pending_delta: int = 0, goal: int = 0) -> DotDecomposition:
    """Split a counter into confirmed, pending and empty dots.

    A pending decrease turns already confirmed dots into pending ones instead
    of adding new dots. A goal of zero disables empty and excess marking.
    """
    if pending_delta < 0:
        # Clamped: a stale low count can race with an in-flight decrease.
        confirmed = max(0, count + pending_delta)
        pending = -pending_delta
    else:
        confirmed = count
        pending = pending_delta

    if not goal:
        return DotDecomposition(
            confirmed_filled=confirmed,
            pending_shown=pending,
            empty_remaining=0,
            confirmed_excess=(False,) * confirmed,
            pending_excess=(False,) * pending,
        )

    return DotDecomposition(
        confirmed_filled=confirmed,
        pending_shown=pending,
        empty_remaining=max(0, goal - confirmed - pending),
        confirmed_excess=tuple(i >= goal for i in range(confirmed)),
        pending_excess=tuple(confirmed + i >= goal for i in range(pending)),
    )


def can_decrease(count: int, pending_delta: int = 0) -> bool:
    """Return whether the decrement control should be enabled."""
    return count + pending_delta > 0
