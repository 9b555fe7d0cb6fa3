"""Reviewer selection.

Pure decision logic: given the active members of a team and a set of ids
that must not be picked, choose reviewers at random. Nothing here touches
the database; persisting the choice is the caller's job.
"""
import random
from typing import Iterable, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")

# Reviewer capacity of a pull request
MAX_REVIEWERS = 2


class RandomSource(Protocol):
    """The subset of ``random.Random`` the selector needs."""

    def shuffle(self, x: list) -> None: ...

    def choice(self, seq: Sequence[T]) -> T: ...


class ReviewerSelector:
    """Selects reviewers from a candidate pool.

    The random source is injected so tests can make selection
    deterministic; by default a fresh ``random.Random`` seeded from OS
    entropy is used.
    """

    def __init__(self, rng: Optional[RandomSource] = None, max_reviewers: int = MAX_REVIEWERS):
        """Initialize the selector.

        Args:
            rng: Random source, ``random.Random`` or anything with ``shuffle`` and ``choice``
            max_reviewers: Upper bound on reviewers picked for a new pull request
        """
        if max_reviewers < 1:
            raise ValueError("max_reviewers must be at least 1")
        self.rng = rng if rng is not None else random.Random()
        self.max_reviewers = max_reviewers

    @staticmethod
    def candidate_pool(member_ids: Iterable[str], exclude: Iterable[str]) -> list[str]:
        """Members minus excluded ids, de-duplicated, in input order.

        Args:
            member_ids: Ids of active team members
            exclude: Ids that must not be picked

        Returns:
            List of eligible ids
        """
        excluded = set(exclude)
        pool = []
        for member_id in member_ids:
            if member_id in excluded:
                continue
            excluded.add(member_id)
            pool.append(member_id)
        return pool

    def select_reviewers(self, member_ids: Iterable[str], author_id: str,
                         exclude: Iterable[str] = ()) -> list[str]:
        """Pick up to ``max_reviewers`` distinct reviewers for a new pull request.

        An empty pool is not an error: the pull request simply gets no
        reviewers.

        Args:
            member_ids: Ids of active members of the author's team
            author_id: Author of the pull request, never picked
            exclude: Further ids that must not be picked

        Returns:
            Between 0 and ``max_reviewers`` distinct ids
        """
        pool = self.candidate_pool(member_ids, [author_id, *exclude])
        if not pool:
            return []

        self.rng.shuffle(pool)
        return pool[:min(self.max_reviewers, len(pool))]

    def select_replacement(self, member_ids: Iterable[str], exclude: Iterable[str]) -> Optional[str]:
        """Pick one replacement reviewer uniformly at random.

        Args:
            member_ids: Ids of active members of the replaced reviewer's team
            exclude: Author, replaced reviewer and current reviewers

        Returns:
            The chosen id, or None when nobody is eligible
        """
        pool = self.candidate_pool(member_ids, exclude)
        if not pool:
            return None
        return self.rng.choice(pool)
