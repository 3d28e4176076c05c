# tests/test_session.py
# -*- coding: utf-8 -*-
"""
Tests du SessionManager : inscription, connexion, déconnexion, utilisateur courant,
mise à jour du profil.
"""

import datetime as dt
from dataclasses import replace

import pytest

from mindbase.errors import AuthError, EmailTaken, InvalidCredentials, MissingFields
from mindbase.persistence.record_store import CURRENT_USER_KEY, USERS_KEY
from mindbase.services.session import SessionManager


def parse_iso(value: str) -> dt.datetime:
    return dt.datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def session(store):
    return SessionManager(store)


# ---------------------------------------------------------------------
# INSCRIPTION
# ---------------------------------------------------------------------

def test_register_returns_new_user(session):
    u = session.register("Ada", "ada@example.com", "secret")
    assert u.id
    assert u.joined_at
    assert u.last_login is None
    assert session.users.get(u.id) == u


def test_register_does_not_log_in(session):
    session.register("Ada", "ada@example.com", "secret")
    assert session.current_user() is None


def test_register_duplicate_email_fails(session):
    session.register("Ada", "dup@example.com", "one")
    with pytest.raises(EmailTaken):
        session.register("Grace", "dup@example.com", "two")
    assert len(session.users.list_all()) == 1


def test_register_email_match_is_case_sensitive(session):
    session.register("Ada", "ada@example.com", "secret")
    u2 = session.register("Ada bis", "ADA@example.com", "secret")
    assert u2.email == "ADA@example.com"


def test_register_unique_ids(session):
    ids = {session.register(f"U{i}", f"u{i}@example.com", "pw").id for i in range(5)}
    assert len(ids) == 5


@pytest.mark.parametrize("name,email,password", [("", "a@b.c", "pw"), ("A", "", "pw"), ("A", "a@b.c", "")])
def test_register_requires_all_fields(session, name, email, password):
    with pytest.raises(MissingFields):
        session.register(name, email, password)


def test_auth_errors_are_value_errors():
    assert issubclass(InvalidCredentials, AuthError)
    assert issubclass(EmailTaken, ValueError)


# ---------------------------------------------------------------------
# CONNEXION
# ---------------------------------------------------------------------

def test_login_sets_session_and_last_login(session):
    u = session.register("Ada", "ada@example.com", "secret")
    before = dt.datetime.now(dt.timezone.utc).replace(microsecond=0)

    logged = session.login("ada@example.com", "secret")

    assert logged.id == u.id
    assert parse_iso(logged.last_login) >= before
    assert session.store.read(CURRENT_USER_KEY) == u.id
    assert session.current_user() == logged  # persisté


@pytest.mark.parametrize("email,password", [
    ("ada@example.com", "wrong"),
    ("nobody@example.com", "secret"),
    ("ADA@example.com", "secret"),
])
def test_login_invalid_credentials(session, email, password):
    session.register("Ada", "ada@example.com", "secret")
    with pytest.raises(InvalidCredentials) as exc:
        session.login(email, password)
    assert str(exc.value) == "Invalid email or password."
    assert session.current_user() is None


@pytest.mark.parametrize("stored", [[42], [{"title": "t"}], [None, {"email": "ada@example.com"}]])
def test_login_with_malformed_user_records(session, stored):
    session.store.write(USERS_KEY, stored)
    with pytest.raises(InvalidCredentials):
        session.login("ada@example.com", "secret")

    session.register("Other", "other@example.com", "pw")
    assert session.login("other@example.com", "pw").email == "other@example.com"


def test_login_switches_current_user(session):
    session.register("Ada", "ada@example.com", "a")
    session.register("Grace", "grace@example.com", "g")
    session.login("ada@example.com", "a")
    g = session.login("grace@example.com", "g")
    assert session.current_user().id == g.id


# ---------------------------------------------------------------------
# DÉCONNEXION / UTILISATEUR COURANT
# ---------------------------------------------------------------------

def test_logout_is_idempotent(session):
    session.register("Ada", "ada@example.com", "secret")
    session.login("ada@example.com", "secret")
    session.logout()
    session.logout()
    assert session.current_user() is None


def test_dangling_pointer_resolves_to_none(session):
    session.store.write(CURRENT_USER_KEY, "ghost")
    assert session.current_user() is None


def test_init_restores_persisted_session(store):
    first = SessionManager(store)
    first.register("Ada", "ada@example.com", "secret")
    first.login("ada@example.com", "secret")

    # nouveau "démarrage" sur le même store
    again = SessionManager(store)
    assert again.init().email == "ada@example.com"

    again.teardown()
    assert SessionManager(store).init() is None


# ---------------------------------------------------------------------
# MISE À JOUR DU PROFIL
# ---------------------------------------------------------------------

def test_update_user_replaces_record(session):
    u = session.register("Ada", "ada@example.com", "secret")
    session.update_user(replace(u, name="Ada L.", bio="Likes maths", password="new"))

    stored = session.users.get(u.id)
    assert stored.name == "Ada L."
    assert stored.bio == "Likes maths"
    assert session.login("ada@example.com", "new").id == u.id


def test_update_user_does_not_recheck_email_uniqueness(session):
    session.register("Ada", "ada@example.com", "a")
    g = session.register("Grace", "grace@example.com", "g")
    session.update_user(replace(g, email="ada@example.com"))
    assert [u.email for u in session.users.list_all()] == ["ada@example.com", "ada@example.com"]


def test_update_unknown_user_is_silent(session):
    u = session.register("Ada", "ada@example.com", "a")
    session.update_user(replace(u, id="ghost", name="Nobody"))
    assert [x.name for x in session.users.list_all()] == ["Ada"]
