"""
Tie-aware leaderboard ranking.

Uses standard competition ranking ("1224"): a player's rank is one plus the
number of players with strictly more XP, so tied players share a rank and
the next distinct score skips the shared positions.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class RankingEntry:
    """One leaderboard row. Derived on read, never persisted."""

    player_id: str
    display_name: str
    xp: int
    rank: int = 0
    is_king: bool = False


def sort_entries(entries: Sequence[RankingEntry]) -> List[RankingEntry]:
    """Order by XP descending; ties by display name then id for stable display."""
    return sorted(entries, key=lambda e: (-e.xp, e.display_name.lower(), e.player_id))


def assign_ranks(entries: Sequence[RankingEntry]) -> List[RankingEntry]:
    """
    Sort entries and assign competition ranks.

    Args:
        entries: Unranked entries, any order

    Returns:
        New list of entries, sorted, with ``rank`` and ``is_king`` set
    """
    ranked: List[RankingEntry] = []
    previous_xp: Optional[int] = None
    current_rank = 0

    for index, entry in enumerate(sort_entries(entries)):
        if entry.xp != previous_xp:
            current_rank = index + 1
            previous_xp = entry.xp
        ranked.append(replace(entry, rank=current_rank, is_king=current_rank == 1))

    return ranked
