# mindbase/services/session.py
# -*- coding: utf-8 -*-
"""
Gestion de la session (utilisateur courant) et des comptes.

Le pointeur de session est une seule valeur persistée (id de l'utilisateur courant).
SessionManager en est l'unique propriétaire : `init()` au démarrage, `logout()` /
`teardown()` à la fermeture.

Usage:
    store = RecordStore()
    session = SessionManager(store)
    session.register("Ada", "ada@example.com", "secret")
    user = session.login("ada@example.com", "secret")
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from mindbase.errors import EmailTaken, InvalidCredentials, MissingFields
from mindbase.persistence.entities import User, new_id, now_iso
from mindbase.persistence.record_store import RecordStore, CURRENT_USER_KEY
from mindbase.persistence.repositories.users_repo import UserRepository

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, store: RecordStore, users: Optional[UserRepository] = None) -> None:
        self.store = store
        self.users = users or UserRepository(store)

    def init(self) -> Optional[User]:
        """Relit le pointeur de session au démarrage."""
        user = self.current_user()
        if user is not None:
            logger.info("Session restaurée pour %s", user.id)
        return user

    def login(self, email: str, password: str) -> User:
        user = self.users.find_by_credentials(email, password)
        if user is None:
            # même erreur pour email inconnu et mauvais mot de passe
            raise InvalidCredentials()

        self.store.write(CURRENT_USER_KEY, user.id)
        updated = replace(user, last_login=now_iso())
        self.users.replace(updated)
        logger.info("Connexion de %s", user.id)
        return updated

    def register(self, name: str, email: str, password: str, bio: Optional[str] = None) -> User:
        if not name or not email or not password:
            raise MissingFields()
        if self.users.find_by_email(email) is not None:
            raise EmailTaken()

        user = User(id=new_id(), name=name, email=email, password=password, bio=bio, joined_at=now_iso())
        self.users.add(user)
        logger.info("Nouvel utilisateur %s", user.id)
        return user

    def logout(self) -> None:
        self.store.remove(CURRENT_USER_KEY)

    teardown = logout

    def current_user(self) -> Optional[User]:
        user_id = self.store.read(CURRENT_USER_KEY)
        if not user_id or not isinstance(user_id, str):
            return None
        return self.users.get(user_id)

    def update_user(self, user: User) -> None:
        # pas de re-vérification d'unicité de l'email ici
        if not self.users.replace(user):
            logger.debug("update_user: id inconnu %s, ignoré", user.id)
