from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.venues.dependencies import (
    PresenceRepositoryDep,
    ReferenceRepositoryDep,
)
from .repository import RankingRepositoryInterface, SQLAlchemyRankingRepository
from .service import RankingService


def get_ranking_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RankingRepositoryInterface:
    return SQLAlchemyRankingRepository(db)


RankingRepositoryDep = Annotated[
    RankingRepositoryInterface, Depends(get_ranking_repository)
]


def get_ranking_service(
    repository: RankingRepositoryDep,
    reference_repository: ReferenceRepositoryDep,
    presence_repository: PresenceRepositoryDep,
) -> RankingService:
    return RankingService(repository, reference_repository, presence_repository)


RankingServiceDep = Annotated[RankingService, Depends(get_ranking_service)]
