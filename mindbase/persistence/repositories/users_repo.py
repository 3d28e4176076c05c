# mindbase/persistence/repositories/users_repo.py
# -*- coding: utf-8 -*-
import logging
from typing import List, Optional

from mindbase.persistence.entities import User, only_records
from mindbase.persistence.record_store import RecordStore, USERS_KEY

logger = logging.getLogger(__name__)

class UserRepository:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def _load(self) -> List[dict]:
        data = self.store.read(USERS_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Clé %s mal formée (%s), traitée comme vide", USERS_KEY, type(data).__name__)
            return []
        return only_records(data, USERS_KEY, logger)

    def list_all(self) -> List[User]:
        return [User.from_dict(d) for d in self._load()]

    def get(self, user_id: str) -> Optional[User]:
        for d in self._load():
            if d.get("id") == user_id:
                return User.from_dict(d)
        return None

    def find_by_email(self, email: str) -> Optional[User]:
        # comparaison exacte, sensible à la casse
        for d in self._load():
            if d.get("email") == email:
                return User.from_dict(d)
        return None

    def find_by_credentials(self, email: str, password: str) -> Optional[User]:
        for d in self._load():
            if d.get("email") == email and d.get("password") == password:
                return User.from_dict(d)
        return None

    def add(self, user: User) -> User:
        users = self._load()
        users.append(user.to_dict())
        self.store.write(USERS_KEY, users)
        return user

    def replace(self, user: User) -> bool:
        users = self._load()
        for i, d in enumerate(users):
            if d.get("id") == user.id:
                users[i] = user.to_dict()
                self.store.write(USERS_KEY, users)
                return True
        return False
