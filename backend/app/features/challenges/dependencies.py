from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.players.dependencies import PlayerRepositoryDep
from .repository import ChallengeRepositoryInterface, SQLAlchemyChallengeRepository
from .service import ChallengeService


def get_challenge_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ChallengeRepositoryInterface:
    return SQLAlchemyChallengeRepository(db)


ChallengeRepositoryDep = Annotated[
    ChallengeRepositoryInterface, Depends(get_challenge_repository)
]


def get_challenge_service(
    repository: ChallengeRepositoryDep, player_repository: PlayerRepositoryDep
) -> ChallengeService:
    return ChallengeService(repository, player_repository)


ChallengeServiceDep = Annotated[ChallengeService, Depends(get_challenge_service)]
