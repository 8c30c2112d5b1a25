"""Pure reward and ranking algorithms."""

from .rewards import (
    MATCH_REWARDS,
    ChallengeReward,
    MatchOutcome,
    MatchRewards,
    calculate_challenge_rewards,
    determine_outcome,
    match_reward_for,
)
from .ranking import RankingEntry, assign_ranks

__all__ = [
    "MATCH_REWARDS",
    "ChallengeReward",
    "MatchOutcome",
    "MatchRewards",
    "calculate_challenge_rewards",
    "determine_outcome",
    "match_reward_for",
    "RankingEntry",
    "assign_ranks",
]
