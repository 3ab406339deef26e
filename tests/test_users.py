# tests/test_users.py
import pytest

from models.user import User
from services.errors import NotFoundError
from services.users import UserDirectory


def test_sign_in_existing_and_new():
    directory = UserDirectory([User(id="u1", name="Alice", email="alice@nexus.com")])
    user, created = directory.sign_in("", " Alice@Nexus.com ")
    assert user.id == "u1" and not created

    user, created = directory.sign_in("", "dana@nexus.com")
    assert created and user.name == "dana"
    assert [e.action for e in directory.audit.entries] == ["Register", "Login"]


def test_update_profile():
    directory = UserDirectory([User(id="u1", name="Alice", email="alice@nexus.com")])
    updated = directory.update_profile("u1", role="Lead Analyst", theme_preference="dark")
    assert directory.get("u1").role == "Lead Analyst"
    assert updated.theme_preference == "dark"
    with pytest.raises(ValueError):
        directory.update_profile("u1", theme_preference="neon")
    with pytest.raises(NotFoundError):
        directory.update_profile("nobody", role="x")


def test_display_name_unknown():
    assert UserDirectory().display_name("ghost") == "Unknown"
