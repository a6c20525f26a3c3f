from datetime import datetime, timedelta, timezone

import pytest

from src.hr_portal.hr_portal.core.enums import Role
from src.hr_portal.hr_portal.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.hr_portal.hr_portal.security.context import SessionContext
from src.hr_portal.hr_portal.security.tokens import TokenService, parse_expires_in


def test_login_issues_token_with_subject_and_role(container, employee, tokens):
    result = container.auth_service.login("Jane@Example.com", "employee123")
    claims = tokens.decode(result["access_token"])

    assert result["token_type"] == "bearer"
    assert result["role"] == "user"
    assert result["user_id"] == employee.user_id
    assert SessionContext.from_claims(claims).user_id == employee.user_id


def test_wrong_password_raises(container, employee):
    with pytest.raises(AuthenticationError):
        container.auth_service.verify("jane@example.com", "wrong-password")


def test_unknown_email_raises(container):
    with pytest.raises(AuthenticationError):
        container.auth_service.verify("nobody@example.com", "whatever1")


def test_super_admin_from_configuration(container, tokens):
    result = container.auth_service.login("root@example.com", "root-password")
    ctx = SessionContext.from_claims(tokens.decode(result["access_token"]))

    assert result["user_id"] is None
    assert ctx.is_admin
    with pytest.raises(AuthorizationError):
        ctx.require_user_id()


def test_expired_token_is_rejected(tokens):
    issued = tokens.issue({"role": "user", "sub": 1}, now=datetime.now(timezone.utc) - timedelta(hours=2))

    with pytest.raises(AuthenticationError, match="expired"):
        tokens.decode(issued)


def test_token_signed_with_other_secret_is_rejected(tokens):
    forged = TokenService(secret="other-secret").issue({"role": "admin"})

    with pytest.raises(AuthenticationError):
        tokens.decode(forged)


@pytest.mark.parametrize("raw,seconds", [("30m", 1800), ("12h", 43200), ("7d", 604800), (90, 90), ("45", 45)])
def test_parse_expires_in(raw, seconds):
    assert parse_expires_in(raw).total_seconds() == seconds


def test_create_user_normalizes_email_and_hashes_password(container):
    user = container.user_service.create_user(
        email="  New.Hire@Example.com ", password="s3cret-pass", full_name="New Hire", department="Design"
    )

    assert user.email == "new.hire@example.com"
    assert user.role == Role.USER
    assert user.dept_name == "Design"
    assert user.password_hash != "s3cret-pass"
    assert container.auth_service.verify("new.hire@example.com", "s3cret-pass").subject_id == user.user_id


def test_create_admin(container):
    user = container.user_service.create_admin(email="ops@example.com", password="long-enough")

    assert user.role == Role.ADMIN
    assert user.full_name == "ops"


@pytest.mark.parametrize(
    "fields,message",
    [
        ({"email": "bad-email", "password": "long-enough"}, "Email"),
        ({"email": "a@example.com", "password": "short"}, "at least 8"),
        ({"email": "jane@example.com", "password": "long-enough"}, "already registered"),
        ({"email": "b@example.com", "password": "long-enough", "department": "Nope"}, "Unknown department"),
    ],
)
def test_create_user_validation(container, employee, fields, message):
    with pytest.raises(ValidationError, match=message):
        container.user_service.create_user(**fields)


def test_directory_search_filter_and_sort(container, employee, admin):
    directory = container.directory_service

    assert [u.full_name for u in directory.list()] == ["Alex Admin", "Jane Employee"]
    assert [u.full_name for u in directory.list(sort_order="desc")] == ["Jane Employee", "Alex Admin"]
    assert [u.full_name for u in directory.list(search="developer")] == ["Jane Employee"]
    assert [u.full_name for u in directory.list(department="design")] == ["Alex Admin"]
    assert [u.full_name for u in directory.list(sort_by="department")] == ["Alex Admin", "Jane Employee"]

    with pytest.raises(ValidationError):
        directory.list(sort_by="salary")


def test_departments_are_admin_managed(container):
    svc = container.user_service
    with pytest.raises(AuthorizationError):
        svc.add_department(current_role=Role.USER, name="Legal")

    dept_id = svc.add_department(current_role=Role.ADMIN, name="Legal")
    assert "Legal" in [d.dept_name for d in svc.list_departments()]

    with pytest.raises(ValidationError):
        svc.add_department(current_role=Role.ADMIN, name="Legal")

    svc.remove_department(current_role=Role.ADMIN, dept_id=dept_id)
    assert "Legal" not in [d.dept_name for d in svc.list_departments()]


@pytest.mark.parametrize("sub", ["not-a-number", "", [1]])
def test_token_with_malformed_subject_is_unauthenticated(sub):
    with pytest.raises(AuthenticationError, match="bad subject"):
        SessionContext.from_claims({"role": "user", "sub": sub})
