"""Points aggregation and ranking of users."""

from collections import defaultdict
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from afterburner.models.medal import Decoration
from afterburner.models.user import User


class LeaderboardEntry(BaseModel):
    """A user and their accumulated points."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    points: int = Field(description="Sum of the points of every decoration")
    user: User = Field(description="Ranked user")


class Leaderboard(BaseModel):
    """Cadets and everyone else, each ranked by points."""

    cadets: list[LeaderboardEntry] = Field(default_factory=list)
    mentors: list[LeaderboardEntry] = Field(default_factory=list)


def compute_points(decorations: Sequence[Decoration]) -> dict[int, int]:
    """Sum medal points per user ID."""
    points: dict[int, int] = defaultdict(int)
    for decoration in decorations:
        points[decoration.user_id] += decoration.medal.points
    return points


def build_leaderboard(users: Sequence[User], decorations: Sequence[Decoration]) -> Leaderboard:
    """Rank users by points, cadets separately from mentors.

    Users without decorations score zero. Ties are broken by GitHub login
    so the order does not depend on the store's iteration order.
    """
    points = compute_points(decorations)
    leaderboard = Leaderboard()

    for user in users:
        entry = LeaderboardEntry(points=points.get(user.id, 0), user=user)
        if user.is_cadet:
            leaderboard.cadets.append(entry)
        else:
            leaderboard.mentors.append(entry)

    for entries in (leaderboard.cadets, leaderboard.mentors):
        entries.sort(key=lambda e: (-e.points, e.user.github_login))

    return leaderboard


async def load_leaderboard(db: AsyncSession) -> Leaderboard:
    """Load every user and decoration and rank them."""
    users_result = await db.execute(select(User))
    users = users_result.scalars().all()

    decorations_result = await db.execute(
        select(Decoration).options(selectinload(Decoration.medal))
    )
    decorations = decorations_result.scalars().all()

    return build_leaderboard(users, decorations)
