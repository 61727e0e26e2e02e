"""
Tests for the SQL repository adapters.

Runs the adapters against an in-memory SQLite database (see the
`database` fixture). Covers:
- Pagination bounds and the independent total count
- Insert, lookup and delete round trips
- Duplicate detection (email uniqueness, active and expired memberships)
- Team deletion cascading to members
- Restoring deleted auth users unchanged
- Password hashing
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from roster.core.database import Database
from roster.domain.membership.entities import (
    MAX_PAGE_BOUND,
    NewAuthUser,
    NewMember,
    NewTeam,
    NewUser,
    PageRequest,
)
from roster.domain.membership.errors import (
    DeletedDuplicationError,
    DuplicationError,
    EntityNotFoundError,
    PersistenceError,
    PersistenceErrorKind,
)
from roster.infrastructure.membership.auth_user_repository import (
    AuthUserRepositoryAdapter,
    build_password_context,
)
from roster.infrastructure.membership.member_repository import MemberRepositoryAdapter
from roster.infrastructure.membership.team_repository import TeamRepositoryAdapter
from roster.infrastructure.membership.user_repository import UserRepositoryAdapter

FAST_HASH_ROUNDS = 1_000
NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def teams(database: Database) -> TeamRepositoryAdapter:
    return TeamRepositoryAdapter(database.engine)


@pytest.fixture
def users(database: Database) -> UserRepositoryAdapter:
    return UserRepositoryAdapter(database.engine)


@pytest.fixture
def auth_users(database: Database) -> AuthUserRepositoryAdapter:
    return AuthUserRepositoryAdapter(database.engine, hash_rounds=FAST_HASH_ROUNDS)


@pytest.fixture
def members(database: Database) -> MemberRepositoryAdapter:
    return MemberRepositoryAdapter(database.engine, clock=lambda: NOW)


def _new_member(team_id: UUID, user_id: UUID, expired_at: datetime | None = None) -> NewMember:
    return NewMember(
        team_id=team_id,
        user_id=user_id,
        name="Ann",
        identity_num="ID-1",
        role="lead",
        expired_at=expired_at,
    )


# ====================================================================
# Pagination
# ====================================================================


class TestPagination:
    """Page bounds are applied to items only; count is always the total."""

    @pytest.fixture(autouse=True)
    def _five_teams(self, teams: TeamRepositoryAdapter) -> None:
        teams.insert_bulk([NewTeam(name=f"team-{i}", description="") for i in range(5)])

    def test_last_partial_page(self, teams: TeamRepositoryAdapter) -> None:
        assert teams.count() == 5
        assert len(teams.list_page(PageRequest(page_size=2, offset=4))) == 1

    def test_zero_page_size_returns_no_items(self, teams: TeamRepositoryAdapter) -> None:
        assert teams.list_page(PageRequest(page_size=0, offset=0)) == []
        assert teams.count() == 5

    def test_offset_beyond_total(self, teams: TeamRepositoryAdapter) -> None:
        assert teams.list_page(PageRequest(page_size=10, offset=50)) == []

    def test_largest_page_size_returns_everything(self, teams: TeamRepositoryAdapter) -> None:
        assert len(teams.list_page(PageRequest(page_size=MAX_PAGE_BOUND))) == 5

    def test_pages_are_stable_and_disjoint(self, teams: TeamRepositoryAdapter) -> None:
        first = teams.list_page(PageRequest(page_size=3, offset=0))
        second = teams.list_page(PageRequest(page_size=3, offset=3))

        assert first == teams.list_page(PageRequest(page_size=3, offset=0))
        assert len(first) == 3
        assert len(second) == 2
        assert {t.id for t in first}.isdisjoint({t.id for t in second})

    def test_empty_table(self, users: UserRepositoryAdapter) -> None:
        assert users.count() == 0
        assert users.list_page(PageRequest(page_size=10)) == []


# ====================================================================
# Round trips
# ====================================================================


class TestCrud:
    """Insert, get and delete behave the same for every table."""

    def test_insert_then_get(self, teams: TeamRepositoryAdapter) -> None:
        created = teams.insert(NewTeam(name="Core", description="Platform team"))
        assert teams.get_by_id(created.id) == created

    def test_get_missing_raises_not_found(self, teams: TeamRepositoryAdapter) -> None:
        with pytest.raises(EntityNotFoundError):
            teams.get_by_id(uuid4())

    def test_bulk_insert_keeps_input_order(self, users: UserRepositoryAdapter) -> None:
        created = users.insert_bulk(
            [NewUser(email="a@acme.io", name="A"), NewUser(email="b@acme.io", name="B")]
        )
        assert [u.email for u in created] == ["a@acme.io", "b@acme.io"]
        assert users.count() == 2

    def test_empty_bulk_insert(self, users: UserRepositoryAdapter) -> None:
        assert users.insert_bulk([]) == []

    def test_delete_is_idempotent(self, teams: TeamRepositoryAdapter) -> None:
        created = teams.insert(NewTeam(name="Core", description=""))
        assert teams.delete_by_id(created.id) is True
        assert teams.delete_by_id(created.id) is False

    def test_delete_all_returns_deleted_rows(self, teams: TeamRepositoryAdapter) -> None:
        created = teams.insert_bulk([NewTeam(name=n, description="") for n in "abc"])

        deleted = teams.delete_all()

        assert {t.id for t in deleted} == {t.id for t in created}
        assert teams.count() == 0


# ====================================================================
# Duplicates
# ====================================================================


class TestEmailUniqueness:
    """Users and auth users reject repeated emails."""

    def test_existing_email(self, users: UserRepositoryAdapter) -> None:
        users.insert(NewUser(email="a@acme.io", name="A"))
        with pytest.raises(DuplicationError):
            users.insert(NewUser(email="a@acme.io", name="Other"))

    def test_repeated_email_in_batch_inserts_nothing(
        self, auth_users: AuthUserRepositoryAdapter
    ) -> None:
        batch = [
            NewAuthUser(email="a@acme.io", name="A", password="password-1"),
            NewAuthUser(email="a@acme.io", name="B", password="password-2"),
        ]
        with pytest.raises(DuplicationError):
            auth_users.insert_bulk(batch)
        assert auth_users.count() == 0

    def test_batch_clashing_with_existing_row_is_atomic(
        self, users: UserRepositoryAdapter
    ) -> None:
        users.insert(NewUser(email="b@acme.io", name="B"))
        with pytest.raises(DuplicationError):
            users.insert_bulk(
                [NewUser(email="a@acme.io", name="A"), NewUser(email="b@acme.io", name="B2")]
            )
        assert users.count() == 1


class TestMemberDuplicates:
    """One active membership per (team, user) pair."""

    def test_active_duplicate(
        self, teams: TeamRepositoryAdapter, members: MemberRepositoryAdapter
    ) -> None:
        team = teams.insert(NewTeam(name="Core", description=""))
        user_id = uuid4()
        members.insert(_new_member(team.id, user_id))

        with pytest.raises(DuplicationError):
            members.insert(_new_member(team.id, user_id))

    def test_expired_duplicate(
        self, teams: TeamRepositoryAdapter, members: MemberRepositoryAdapter
    ) -> None:
        team = teams.insert(NewTeam(name="Core", description=""))
        user_id = uuid4()
        members.insert(_new_member(team.id, user_id, expired_at=NOW - timedelta(days=1)))

        with pytest.raises(DeletedDuplicationError):
            members.insert(_new_member(team.id, user_id))

    def test_same_user_in_another_team(
        self, teams: TeamRepositoryAdapter, members: MemberRepositoryAdapter
    ) -> None:
        first, second = teams.insert_bulk(
            [NewTeam(name="a", description=""), NewTeam(name="b", description="")]
        )
        user_id = uuid4()
        members.insert(_new_member(first.id, user_id))
        members.insert(_new_member(second.id, user_id))
        assert members.count() == 2

    def test_server_stamps_dates(
        self, teams: TeamRepositoryAdapter, members: MemberRepositoryAdapter
    ) -> None:
        team = teams.insert(NewTeam(name="Core", description=""))
        created = members.insert(_new_member(team.id, uuid4()))

        stored = members.get_by_id(created.id)

        assert stored.assigned_at == NOW
        assert stored.modification_date == NOW
        assert stored.expired_at is None

    def test_unknown_team_is_a_database_error(self, members: MemberRepositoryAdapter) -> None:
        with pytest.raises(PersistenceError) as exc_info:
            members.insert(_new_member(uuid4(), uuid4()))
        assert exc_info.value.kind is PersistenceErrorKind.DATABASE


# ====================================================================
# Cascades and compensation support
# ====================================================================


class TestCascades:
    """Dependent rows follow their parents."""

    def test_team_delete_removes_its_members(
        self, teams: TeamRepositoryAdapter, members: MemberRepositoryAdapter
    ) -> None:
        kept, dropped = teams.insert_bulk(
            [NewTeam(name="kept", description=""), NewTeam(name="dropped", description="")]
        )
        members.insert(_new_member(kept.id, uuid4()))
        members.insert(_new_member(dropped.id, uuid4()))

        teams.delete_by_id(dropped.id)

        remaining = members.list_page(PageRequest(page_size=10))
        assert [m.team_id for m in remaining] == [kept.id]

    def test_delete_by_user_ids(
        self, teams: TeamRepositoryAdapter, members: MemberRepositoryAdapter
    ) -> None:
        team = teams.insert(NewTeam(name="Core", description=""))
        gone, stays = uuid4(), uuid4()
        members.insert(_new_member(team.id, gone))
        members.insert(_new_member(team.id, stays))

        assert members.delete_by_user_ids([gone]) == 1
        assert members.delete_by_user_ids([]) == 0
        assert [m.user_id for m in members.list_page(PageRequest(page_size=10))] == [stays]

    def test_restore_keeps_ids_and_hashes(self, auth_users: AuthUserRepositoryAdapter) -> None:
        auth_users.insert_bulk(
            [
                NewAuthUser(email="a@acme.io", name="A", password="password-1"),
                NewAuthUser(email="b@acme.io", name="B", password="password-2"),
            ]
        )
        deleted = auth_users.delete_all()
        assert auth_users.count() == 0

        auth_users.restore_bulk(deleted)

        restored = auth_users.list_page(PageRequest(page_size=10))
        assert sorted(restored, key=lambda u: u.id) == sorted(deleted, key=lambda u: u.id)


# ====================================================================
# Passwords
# ====================================================================


class TestPasswords:
    """Auth users store a passlib PBKDF2-SHA256 hash only."""

    def test_stored_hash_verifies(self, auth_users: AuthUserRepositoryAdapter) -> None:
        created = auth_users.insert(
            NewAuthUser(email="a@acme.io", name="A", password="correct horse")
        )
        stored = auth_users.get_by_id(created.id)
        context = build_password_context()

        assert stored.password_hash != "correct horse"
        assert stored.password_hash.startswith(f"$pbkdf2-sha256${FAST_HASH_ROUNDS}$")
        assert context.verify("correct horse", stored.password_hash)
        assert not context.verify("wrong horse", stored.password_hash)

    def test_same_password_gets_distinct_salts(self) -> None:
        context = build_password_context(rounds=FAST_HASH_ROUNDS)
        assert context.hash("pw") != context.hash("pw")

    def test_round_count_follows_settings(self) -> None:
        hashed = build_password_context(rounds=2_000).hash("pw")
        assert hashed.startswith("$pbkdf2-sha256$2000$")

    @pytest.mark.parametrize("hashed", ["", "garbage", "pbkdf2_sha256$1000$abc$def"])
    def test_foreign_hash_is_not_identified(self, hashed: str) -> None:
        assert build_password_context().identify(hashed) is None
