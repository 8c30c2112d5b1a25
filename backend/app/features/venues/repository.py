"""Repositories for venue reference data and live presence rows."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import dialect_insert
from app.core.models import generate_uuid
from app.features.players.orm_models import PlayerORM
from .orm_models import ActivePlayerORM, CityORM, CountryORM, SportORM, VenueORM

logger = structlog.get_logger(__name__)


class ReferenceRepositoryInterface(ABC):
    """Read-only lookups of venues, sports and geography."""

    @abstractmethod
    async def get_venue(self, venue_id: str) -> Optional[VenueORM]:
        pass

    @abstractmethod
    async def get_sport(self, sport_id: str) -> Optional[SportORM]:
        pass

    @abstractmethod
    async def get_sport_by_slug(self, slug: str) -> Optional[SportORM]:
        pass

    @abstractmethod
    async def get_city(self, city_id: str) -> Optional[CityORM]:
        pass

    @abstractmethod
    async def get_country(self, country_id: str) -> Optional[CountryORM]:
        pass


class SQLAlchemyReferenceRepository(ReferenceRepositoryInterface):
    """SQLAlchemy implementation of reference lookups. Inactive rows are invisible."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_venue(self, venue_id: str) -> Optional[VenueORM]:
        stmt = select(VenueORM).where(VenueORM.id == venue_id, VenueORM.is_active)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_sport(self, sport_id: str) -> Optional[SportORM]:
        stmt = select(SportORM).where(SportORM.id == sport_id, SportORM.is_active)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_sport_by_slug(self, slug: str) -> Optional[SportORM]:
        stmt = select(SportORM).where(SportORM.slug == slug, SportORM.is_active)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_city(self, city_id: str) -> Optional[CityORM]:
        result = await self.db.execute(select(CityORM).where(CityORM.id == city_id))
        return result.scalar_one_or_none()

    async def get_country(self, country_id: str) -> Optional[CountryORM]:
        result = await self.db.execute(
            select(CountryORM).where(CountryORM.id == country_id)
        )
        return result.scalar_one_or_none()


class PresenceRepositoryInterface(ABC):
    """Interface for active-at-venue presence rows.

    Write methods do not commit; the calling service owns the transaction.
    """

    @abstractmethod
    async def get_for_player(self, player_id: str) -> Optional[ActivePlayerORM]:
        """The player's single presence row, wherever it is."""
        pass

    @abstractmethod
    async def upsert(
        self,
        player_id: str,
        venue_id: str,
        latitude: float,
        longitude: float,
        seen_at: datetime,
    ) -> None:
        """Insert or replace the player's presence row in one statement."""
        pass

    @abstractmethod
    async def touch(
        self,
        player_id: str,
        venue_id: str,
        latitude: Optional[float],
        longitude: Optional[float],
        seen_at: datetime,
    ) -> bool:
        """Refresh an existing row at the venue; False when there is none."""
        pass

    @abstractmethod
    async def delete(self, player_id: str, venue_id: str) -> int:
        """Remove the player's row at the venue, returning rows deleted."""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Evict rows last seen before the cutoff, returning rows deleted."""
        pass

    @abstractmethod
    async def list_at_venue(
        self, venue_id: str, seen_after: datetime
    ) -> List[Tuple[ActivePlayerORM, str]]:
        """Rows at the venue seen after the cutoff with display names, most recent first."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass


class SQLAlchemyPresenceRepository(PresenceRepositoryInterface):
    """SQLAlchemy implementation of the presence repository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_player(self, player_id: str) -> Optional[ActivePlayerORM]:
        stmt = (
            select(ActivePlayerORM)
            .where(ActivePlayerORM.player_id == player_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        player_id: str,
        venue_id: str,
        latitude: float,
        longitude: float,
        seen_at: datetime,
    ) -> None:
        insert_stmt = dialect_insert(self.db, ActivePlayerORM).values(
            id=generate_uuid(),
            player_id=player_id,
            venue_id=venue_id,
            latitude=latitude,
            longitude=longitude,
            last_seen_at=seen_at,
            created_at=seen_at,
        )
        # Moving venues replaces the row wholesale; created_at restarts with it
        excluded = insert_stmt.excluded
        await self.db.execute(
            insert_stmt.on_conflict_do_update(
                index_elements=["player_id"],
                set_={
                    "venue_id": excluded.venue_id,
                    "latitude": excluded.latitude,
                    "longitude": excluded.longitude,
                    "last_seen_at": excluded.last_seen_at,
                    "created_at": excluded.created_at,
                },
            )
        )

    async def touch(
        self,
        player_id: str,
        venue_id: str,
        latitude: Optional[float],
        longitude: Optional[float],
        seen_at: datetime,
    ) -> bool:
        values: dict = {"last_seen_at": seen_at}
        if latitude is not None and longitude is not None:
            values["latitude"] = latitude
            values["longitude"] = longitude

        stmt = (
            update(ActivePlayerORM)
            .where(
                ActivePlayerORM.player_id == player_id,
                ActivePlayerORM.venue_id == venue_id,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0

    async def delete(self, player_id: str, venue_id: str) -> int:
        stmt = delete(ActivePlayerORM).where(
            ActivePlayerORM.player_id == player_id,
            ActivePlayerORM.venue_id == venue_id,
        ).execution_options(synchronize_session=False)
        result = await self.db.execute(stmt)
        return result.rowcount

    async def delete_older_than(self, cutoff: datetime) -> int:
        stmt = (
            delete(ActivePlayerORM)
            .where(ActivePlayerORM.last_seen_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def list_at_venue(
        self, venue_id: str, seen_after: datetime
    ) -> List[Tuple[ActivePlayerORM, str]]:
        stmt = (
            select(ActivePlayerORM, PlayerORM.display_name)
            .join(PlayerORM, PlayerORM.id == ActivePlayerORM.player_id)
            .where(
                ActivePlayerORM.venue_id == venue_id,
                ActivePlayerORM.last_seen_at >= seen_after,
            )
            .order_by(ActivePlayerORM.last_seen_at.desc())
        )
        result = await self.db.execute(stmt)
        return [(row, display_name) for row, display_name in result.all()]

    async def commit(self) -> None:
        await self.db.commit()
