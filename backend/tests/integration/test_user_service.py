"""
Integration tests for user management and login.
"""
import pytest

from kore.errors import AuthError, ForbiddenError, ValidationError
from kore.schemas.user import PasswordChange, UserCreate, UserUpdateMe
from kore.services.auth_service import auth_service
from kore.services.security import decode_access_token
from kore.services.user_service import user_service


@pytest.mark.integration
class TestCreateUser:

    def test_defaults_to_staff_and_normalises_email(self, db_session):
        user = user_service.create_user(db_session, UserCreate(
            name="Priya", email="  Priya@Kore.TEST ", password="hunter22",
        ))
        assert user.email == "priya@kore.test"
        assert user.role == "staff"
        assert user.hashed_password != "hunter22"

    @pytest.mark.parametrize("payload,message", [
        ({"name": "P", "email": "p@kore.test", "password": "hunter22"}, "Name is required (min 2 characters)"),
        ({"name": "Priya", "email": "not-an-email", "password": "hunter22"}, "Valid email is required"),
        ({"name": "Priya", "email": "p@kore.test", "password": "123"}, "Password must be at least 6 characters"),
        (
            {"name": "Priya", "email": "p@kore.test", "password": "hunter22", "role": "superadmin"},
            "Invalid role. Allowed: admin, staff, distributor",
        ),
    ])
    def test_validation(self, db_session, payload, message):
        with pytest.raises(ValidationError) as exc_info:
            user_service.create_user(db_session, UserCreate(**payload))
        assert exc_info.value.message == message

    def test_duplicate_email(self, db_session, admin):
        with pytest.raises(ValidationError) as exc_info:
            user_service.create_user(db_session, UserCreate(
                name="Another", email="ADMIN@kore.test", password="hunter22",
            ))
        assert exc_info.value.message == "Email already exists"


@pytest.mark.integration
class TestRoleRules:

    def test_superadmin_changes_role(self, db_session, superadmin, admin):
        user = user_service.update_user_role(db_session, superadmin, admin.id, "Staff")
        assert user.role == "staff"

    def test_cannot_change_own_role(self, db_session, superadmin):
        with pytest.raises(ForbiddenError):
            user_service.update_user_role(db_session, superadmin, superadmin.id, "admin")

    def test_superadmin_role_is_fixed(self, db_session, superadmin, user_factory):
        other_root = user_factory("root2@kore.test", "superadmin")
        with pytest.raises(ForbiddenError):
            user_service.update_user_role(db_session, superadmin, other_root.id, "staff")

    def test_cannot_promote_to_superadmin(self, db_session, superadmin, admin):
        with pytest.raises(ValidationError):
            user_service.update_user_role(db_session, superadmin, admin.id, "superadmin")

    def test_delete_rules(self, db_session, superadmin, admin, user_factory):
        with pytest.raises(ForbiddenError):
            user_service.delete_user(db_session, superadmin, superadmin.id)

        other_root = user_factory("root2@kore.test", "superadmin")
        with pytest.raises(ForbiddenError):
            user_service.delete_user(db_session, superadmin, other_root.id)

        user_service.delete_user(db_session, superadmin, admin.id)
        assert user_service.list_users(db_session)["meta"]["total"] == 2


@pytest.mark.integration
class TestProfileAndListing:

    def test_update_me(self, db_session, distributor):
        user = user_service.update_me(db_session, distributor, UserUpdateMe(location="Kanpur"))
        assert user.location == "Kanpur"
        assert user.company_name == "Ravi Footwear"

    def test_change_password(self, db_session, admin, test_password):
        with pytest.raises(AuthError):
            user_service.change_password(db_session, admin, PasswordChange(
                current_password="wrong-one", new_password="newpass1",
            ))

        user_service.change_password(db_session, admin, PasswordChange(
            current_password=test_password, new_password="newpass1",
        ))
        assert auth_service.login(db_session, "admin@kore.test", "newpass1")["user"].id == admin.id

    def test_list_clamps_paging(self, db_session, superadmin, admin, distributor):
        result = user_service.list_users(db_session, page="0", limit="500")
        assert result["meta"] == {"page": 1, "limit": 100, "total": 3, "total_pages": 1}

        result = user_service.list_users(db_session, page=2, limit=2)
        assert len(result["items"]) == 1
        assert result["meta"]["total_pages"] == 2

    def test_list_filters(self, db_session, superadmin, admin, distributor):
        assert [u.email for u in user_service.list_users(db_session, role="DISTRIBUTOR")["items"]] == [
            "dist@kore.test",
        ]
        assert [u.email for u in user_service.list_users(db_session, search="office")["items"]] == [
            "admin@kore.test",
        ]


@pytest.mark.integration
class TestLogin:

    def test_login_issues_token(self, db_session, distributor, test_password):
        result = auth_service.login(db_session, " DIST@kore.test", test_password)

        payload = decode_access_token(result["token"])
        assert payload["sub"] == str(distributor.id)
        assert payload["role"] == "distributor"

    def test_same_message_for_unknown_email_and_bad_password(self, db_session, distributor, test_password):
        with pytest.raises(AuthError) as unknown:
            auth_service.login(db_session, "nobody@kore.test", test_password)
        with pytest.raises(AuthError) as wrong:
            auth_service.login(db_session, "dist@kore.test", "bad-password")
        assert unknown.value.message == wrong.value.message == "Invalid email or password"

    def test_missing_fields(self, db_session):
        with pytest.raises(ValidationError):
            auth_service.login(db_session, "", None)
