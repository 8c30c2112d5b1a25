"""Dependencies for the players feature."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import get_db
from app.features.venues.dependencies import ReferenceRepositoryDep
from .repository import PlayerRepositoryInterface, SQLAlchemyPlayerRepository
from .service import PlayerStatsService


async def get_player_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlayerRepositoryInterface:
    """Get player repository instance.

    :param db: Database session
    :returns: Player repository implementation
    """
    return SQLAlchemyPlayerRepository(db)


PlayerRepositoryDep = Annotated[
    PlayerRepositoryInterface, Depends(get_player_repository)
]


async def get_player_stats_service(
    repository: PlayerRepositoryDep,
    reference_repository: ReferenceRepositoryDep,
) -> PlayerStatsService:
    return PlayerStatsService(repository, reference_repository)


PlayerStatsServiceDep = Annotated[
    PlayerStatsService, Depends(get_player_stats_service)
]
