"""Unit tests for user service."""

import pytest

from homeledger.api.errors import NotFoundError, UserAlreadyExistsError, WeakPasswordError
from homeledger.models import Property, User
from homeledger.services.auth_service import verify_password
from homeledger.services.user_service import UserService


class TestUserService:
    """Test user service methods."""

    @pytest.fixture
    def service(self, db_session):
        return UserService(db_session)

    def test_create_user(self, service):
        user = service.create_user("  carol ", "carol@example.com", "Passw0rd!")

        assert user.id is not None
        assert user.username == "carol"
        assert verify_password("Passw0rd!", user.password_hash)

    def test_create_rejects_short_username(self, service):
        with pytest.raises(ValueError, match="at least 3"):
            service.create_user("ab", "ab@example.com", "Passw0rd!")

    def test_create_rejects_bad_email(self, service):
        with pytest.raises(ValueError, match="email"):
            service.create_user("carol", "carol.example.com", "Passw0rd!")

    def test_create_rejects_weak_password(self, service):
        with pytest.raises(WeakPasswordError):
            service.create_user("carol", "carol@example.com", "password")

    def test_create_rejects_duplicates(self, service, user):
        with pytest.raises(UserAlreadyExistsError):
            service.create_user("alice", "new@example.com", "Passw0rd!")
        with pytest.raises(UserAlreadyExistsError):
            service.create_user("alice2", "alice@example.com", "Passw0rd!")

    def test_list_users_with_property_counts(self, service, db_session, user, other_user):
        db_session.add_all(
            [Property(user_id=user.id, name="A"), Property(user_id=user.id, name="B")]
        )
        db_session.commit()

        rows = service.list_users()

        assert [(r.username, r.property_count) for r in rows] == [("alice", 2), ("mallory", 0)]

    def test_set_password(self, service, user):
        service.set_password("alice", "N3w-Pass!")

        assert verify_password("N3w-Pass!", user.password_hash)

    def test_set_password_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.set_password("ghost", "N3w-Pass!")

    def test_delete_user_cascades(self, service, db_session, user):
        db_session.add(Property(user_id=user.id, name="A"))
        db_session.commit()

        service.delete_user("alice")

        assert db_session.query(User).count() == 0
        assert db_session.query(Property).count() == 0

    def test_delete_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.delete_user("ghost")
