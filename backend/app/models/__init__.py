"""Registry of every ORM model.

Importing this package populates ``Base.metadata`` with all tables, which is
what ``init_db`` and the test suite rely on.
"""

from app.core.models import Base
from app.features.venues.orm_models import (
    ActivePlayerORM,
    CityORM,
    CountryORM,
    SportORM,
    VenueORM,
)
from app.features.players.orm_models import PlayerORM, PlayerStatsORM
from app.features.matches.orm_models import MatchORM
from app.features.challenges.orm_models import ChallengeAttemptORM, ChallengeORM

__all__ = [
    "Base",
    "ActivePlayerORM",
    "CityORM",
    "CountryORM",
    "SportORM",
    "VenueORM",
    "PlayerORM",
    "PlayerStatsORM",
    "MatchORM",
    "ChallengeAttemptORM",
    "ChallengeORM",
]
