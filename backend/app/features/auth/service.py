"""Session resolution: maps a bearer token to the acting player.

Token issuance belongs to the external identity provider. ``create_access_token``
mints compatible tokens for tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from fastapi import HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.core.config import Settings, get_global_settings
from app.features.players.orm_models import PlayerORM
from app.features.players.repository import PlayerRepositoryInterface

logger = structlog.get_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


class AuthService:
    """Verifies session tokens and resolves the acting player."""

    def __init__(
        self,
        player_repository: PlayerRepositoryInterface,
        settings: Optional[Settings] = None,
    ):
        self.players = player_repository
        self.settings = settings or get_global_settings()

    def create_access_token(
        self, player_id: str, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a JWT access token whose subject is the player id."""
        expire = datetime.now(timezone.utc) + (
            expires_delta
            or timedelta(minutes=self.settings.jwt_access_token_expire_minutes)
        )
        return jwt.encode(
            {"sub": player_id, "exp": expire},
            self.settings.jwt_secret_key,
            algorithm=self.settings.jwt_algorithm,
        )

    async def get_current_player(self, token: Optional[str]) -> PlayerORM:
        """Resolve the player behind a bearer token.

        :raises HTTPException: 401 when the token is missing, invalid, expired
            or names an unknown player
        """
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

        if not token:
            raise credentials_exception

        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret_key,
                algorithms=[self.settings.jwt_algorithm],
            )
        except JWTError as e:
            logger.info("Rejected session token", error=str(e))
            raise credentials_exception

        player_id = payload.get("sub")
        if not player_id:
            raise credentials_exception

        player = await self.players.get_by_id(player_id)
        if player is None:
            logger.info("Session token for unknown player", player_id=player_id)
            raise credentials_exception

        return player
