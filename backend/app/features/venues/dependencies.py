"""Dependencies for the venues feature."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import get_db
from .repository import (
    PresenceRepositoryInterface,
    ReferenceRepositoryInterface,
    SQLAlchemyPresenceRepository,
    SQLAlchemyReferenceRepository,
)
from .service import PresenceService

DatabaseDep = Annotated[AsyncSession, Depends(get_db)]


def get_reference_repository(db: DatabaseDep) -> ReferenceRepositoryInterface:
    return SQLAlchemyReferenceRepository(db)


ReferenceRepositoryDep = Annotated[
    ReferenceRepositoryInterface, Depends(get_reference_repository)
]


def get_presence_repository(db: DatabaseDep) -> PresenceRepositoryInterface:
    return SQLAlchemyPresenceRepository(db)


PresenceRepositoryDep = Annotated[
    PresenceRepositoryInterface, Depends(get_presence_repository)
]


def get_presence_service(
    presence_repository: PresenceRepositoryDep,
    reference_repository: ReferenceRepositoryDep,
) -> PresenceService:
    return PresenceService(presence_repository, reference_repository)


PresenceServiceDep = Annotated[PresenceService, Depends(get_presence_service)]
