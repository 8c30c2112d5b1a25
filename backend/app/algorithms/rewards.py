"""
Reward computation for skill challenges and 1-on-1 matches.

Pure functions without I/O. The match lifecycle and the challenge attempt
recorder both consume this module, so the two never disagree about amounts.
"""

from dataclasses import dataclass
from typing import Optional, Union

from app.core.enums import Difficulty
from app.utils.statistics import round_half_up, safe_divide

# Accuracy at or above which the challenge's RP reward is granted in full
RP_ACCURACY_THRESHOLD = 0.8

DIFFICULTY_MULTIPLIERS = {
    Difficulty.EASY: 1.0,
    Difficulty.MEDIUM: 1.5,
    Difficulty.HARD: 2.0,
}


@dataclass(frozen=True)
class ChallengeReward:
    """XP/RP granted for one challenge attempt."""

    xp: int
    rp: int
    accuracy: float

    @property
    def accuracy_percent(self) -> int:
        return round_half_up(self.accuracy * 100)


@dataclass(frozen=True)
class MatchRewards:
    """Fixed match reward table."""

    winner_xp: int = 100
    winner_rp: int = 20
    loser_xp: int = 25
    loser_rp: int = 0


MATCH_REWARDS = MatchRewards()


@dataclass(frozen=True)
class MatchOutcome:
    """Settled result of a scored match."""

    winner_id: Optional[str]
    loser_id: Optional[str]

    @property
    def is_draw(self) -> bool:
        return self.winner_id is None


def difficulty_multiplier(difficulty: Union[Difficulty, str, None]) -> float:
    """Return the XP multiplier for a difficulty, 1.0 for anything unknown."""
    try:
        return DIFFICULTY_MULTIPLIERS[Difficulty(difficulty)]
    except ValueError:
        return 1.0


def calculate_challenge_rewards(
    base_xp: int,
    base_rp: int,
    difficulty: Union[Difficulty, str, None],
    score_value: float,
    max_value: float,
) -> ChallengeReward:
    """
    Compute accuracy-scaled rewards for a challenge attempt.

    Args:
        base_xp: Challenge base XP reward
        base_rp: Challenge base RP reward
        difficulty: Challenge difficulty; unknown values use multiplier 1.0
        score_value: Achieved score, 0 <= score_value <= max_value
        max_value: Maximum achievable score

    Returns:
        ChallengeReward; a zero max yields zero rewards
    """
    if max_value <= 0:
        return ChallengeReward(xp=0, rp=0, accuracy=0.0)

    accuracy = safe_divide(score_value, max_value)
    xp = round_half_up(base_xp * accuracy * difficulty_multiplier(difficulty))
    rp = base_rp if accuracy >= RP_ACCURACY_THRESHOLD else 0
    return ChallengeReward(xp=xp, rp=rp, accuracy=accuracy)


def determine_outcome(
    player1_id: str, player2_id: str, player1_score: int, player2_score: int
) -> MatchOutcome:
    """Higher score wins; equal scores are a draw."""
    if player1_score > player2_score:
        return MatchOutcome(winner_id=player1_id, loser_id=player2_id)
    if player2_score > player1_score:
        return MatchOutcome(winner_id=player2_id, loser_id=player1_id)
    return MatchOutcome(winner_id=None, loser_id=None)


def match_reward_for(
    player_id: str,
    winner_id: Optional[str],
    rewards: MatchRewards = MATCH_REWARDS,
) -> tuple[int, int]:
    """
    XP and RP a participant earns from a settled match.

    A draw pays every participant the non-winner amount.
    """
    if winner_id is not None and player_id == winner_id:
        return rewards.winner_xp, rewards.winner_rp
    return rewards.loser_xp, rewards.loser_rp


def format_challenge_message(reward: ChallengeReward) -> str:
    """Human readable summary, e.g. ``"85% accuracy! Earned 128 XP and 10 RP"``."""
    message = f"{reward.accuracy_percent}% accuracy! Earned {reward.xp} XP"
    if reward.rp > 0:
        message += f" and {reward.rp} RP"
    return message
