"""Authentication dependencies for protecting routes."""

from typing import Annotated, Optional

from fastapi import Depends

from app.features.players.dependencies import PlayerRepositoryDep
from app.features.players.orm_models import PlayerORM
from .service import AuthService, oauth2_scheme


def get_auth_service(player_repository: PlayerRepositoryDep) -> AuthService:
    return AuthService(player_repository)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_player(
    auth_service: AuthServiceDep,
    token: Optional[str] = Depends(oauth2_scheme),
) -> PlayerORM:
    """Get the player making the request."""
    return await auth_service.get_current_player(token)


CurrentPlayerDep = Annotated[PlayerORM, Depends(get_current_player)]
