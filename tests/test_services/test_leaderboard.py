"""Tests for points aggregation and ranking."""

from unittest.mock import AsyncMock, MagicMock

from afterburner.models.medal import Decoration, Medal
from afterburner.models.user import User
from afterburner.services.leaderboard import build_leaderboard, compute_points, load_leaderboard


def create_user(id: int, login: str, type: str = "cadet") -> User:
    return User(id=id, github_login=login, name=login.title(), email=f"{login}@example.com", type=type)


def create_medal(id: int, points: int) -> Medal:
    return Medal(
        id=id,
        name=f"Medal {id}",
        image="on.png",
        image_disabled="off.png",
        points=points,
        sort_key=f"{id:03d}",
        description="",
        secret=False,
    )


def decorate(user: User, medal: Medal) -> Decoration:
    return Decoration(user_id=user.id, medal_id=medal.id, medal=medal)


class TestComputePoints:
    """Tests for summing medal points."""

    def test_sum_per_user(self) -> None:
        alice = create_user(1, "alice")
        bob = create_user(2, "bob")
        gold = create_medal(1, 50)
        bronze = create_medal(2, 10)

        points = compute_points(
            [decorate(alice, gold), decorate(alice, bronze), decorate(bob, bronze)]
        )

        assert points == {1: 60, 2: 10}

    def test_same_medal_counts_every_time(self) -> None:
        alice = create_user(1, "alice")
        bronze = create_medal(1, 10)

        points = compute_points([decorate(alice, bronze)] * 3)

        assert points[1] == 30


class TestBuildLeaderboard:
    """Tests for ranking users."""

    def test_partitions_and_sorts(self) -> None:
        alice = create_user(1, "alice")
        bob = create_user(2, "bob")
        carol = create_user(3, "carol", type="mentor")
        dave = create_user(4, "dave", type="mentor")
        gold = create_medal(1, 50)
        bronze = create_medal(2, 10)
        decorations = [
            decorate(alice, bronze),
            decorate(bob, gold),
            decorate(carol, bronze),
            decorate(dave, gold),
            decorate(dave, bronze),
        ]

        board = build_leaderboard([alice, bob, carol, dave], decorations)

        assert [(e.points, e.user.github_login) for e in board.cadets] == [
            (50, "bob"),
            (10, "alice"),
        ]
        assert [(e.points, e.user.github_login) for e in board.mentors] == [
            (60, "dave"),
            (10, "carol"),
        ]

    def test_points_match_decorations_for_every_user(self) -> None:
        users = [create_user(i, f"user{i}", type="cadet" if i % 2 else "mentor") for i in range(1, 7)]
        medals = [create_medal(1, 5), create_medal(2, 20), create_medal(3, 0)]
        decorations = [
            decorate(user, medals[(user.id + n) % 3]) for user in users for n in range(user.id % 4)
        ]

        board = build_leaderboard(users, decorations)
        entries = board.cadets + board.mentors

        # Partitions are disjoint and cover every user
        assert sorted(e.user.id for e in entries) == [u.id for u in users]
        for entry in entries:
            expected = sum(d.medal.points for d in decorations if d.user_id == entry.user.id)
            assert entry.points == expected
        for ranked in (board.cadets, board.mentors):
            points = [e.points for e in ranked]
            assert points == sorted(points, reverse=True)

    def test_users_without_decorations_score_zero(self) -> None:
        alice = create_user(1, "alice")

        board = build_leaderboard([alice], [])

        assert board.cadets[0].points == 0
        assert board.mentors == []

    def test_ties_ordered_by_login(self) -> None:
        zed = create_user(1, "zed")
        amy = create_user(2, "amy")
        medal = create_medal(1, 10)

        board = build_leaderboard([zed, amy], [decorate(zed, medal), decorate(amy, medal)])

        assert [e.user.github_login for e in board.cadets] == ["amy", "zed"]

    def test_unknown_type_ranked_with_mentors(self) -> None:
        guest = create_user(1, "guest", type="alumni")

        board = build_leaderboard([guest], [])

        assert board.cadets == []
        assert board.mentors[0].user is guest


class TestLoadLeaderboard:
    """Tests for loading the leaderboard from the database."""

    async def test_load(self, mock_db_session: AsyncMock) -> None:
        alice = create_user(1, "alice")
        medal = create_medal(1, 15)

        users_result = MagicMock()
        users_result.scalars.return_value.all.return_value = [alice]
        decorations_result = MagicMock()
        decorations_result.scalars.return_value.all.return_value = [decorate(alice, medal)]
        mock_db_session.execute = AsyncMock(side_effect=[users_result, decorations_result])

        board = await load_leaderboard(mock_db_session)

        assert board.cadets[0].points == 15
        assert mock_db_session.execute.await_count == 2
