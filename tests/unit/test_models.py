"""
Unit tests for the User and UserProfile model helpers.
"""

from datetime import date

from app.models import Capability, User, UserPermission, UserProfile, UserStatus


def test_status_follows_deletion_marker():
    user = User(name="Jane", email="jane@example.com", password="x")
    assert user.status is UserStatus.ACTIVE

    user.soft_delete()
    assert user.status is UserStatus.DELETED
    assert user.is_deleted

    user.restore()
    assert user.status is UserStatus.ACTIVE
    assert user.deleted_at is None


def test_mark_email_as_verified():
    user = User(name="Jane", email="jane@example.com", password="x")
    assert not user.is_verified

    user.mark_email_as_verified()

    assert user.is_verified


def test_has_capability():
    user = User(name="Jane", email="jane@example.com", password="x")
    user.permissions = [UserPermission(permission=Capability.VIEW.value)]

    assert user.has_capability("view users")
    assert not user.has_capability("delete users")


def test_profile_completion():
    profile = UserProfile(phone="+34600000000", city="Madrid", country="ES")
    assert not profile.is_complete

    profile.birth_date = date(1990, 5, 17)
    profile.address_line_1 = "Calle Mayor 1"

    assert profile.is_complete
