from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.players.dependencies import PlayerRepositoryDep
from app.features.venues.dependencies import ReferenceRepositoryDep
from .repository import MatchRepositoryInterface, SQLAlchemyMatchRepository
from .service import MatchService

# Database dependency
DatabaseDep = Annotated[AsyncSession, Depends(get_db)]


# Repository dependency
def get_match_repository(db: DatabaseDep) -> MatchRepositoryInterface:
    return SQLAlchemyMatchRepository(db)


MatchRepositoryDep = Annotated[MatchRepositoryInterface, Depends(get_match_repository)]


# Service dependency
def get_match_service(
    repository: MatchRepositoryDep,
    reference_repository: ReferenceRepositoryDep,
    player_repository: PlayerRepositoryDep,
) -> MatchService:
    return MatchService(repository, reference_repository, player_repository)


MatchServiceDep = Annotated[MatchService, Depends(get_match_service)]
