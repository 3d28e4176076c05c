# mindbase/persistence/repositories/collections_repo.py
# -*- coding: utf-8 -*-
"""
Repository générique pour les collections par utilisateur (chats, journaux, résultats).

Stockage : une clé par type d'entité, contenant {user_id: [record, ...]}.
Un user_id absent équivaut à une liste vide.

Politiques d'ordre :
- APPEND             : ajout en fin de liste (ordre chronologique)
- PREPEND_OR_REPLACE : remplace sur place si l'id existe, sinon insère en tête
"""

from __future__ import annotations

import enum
import logging
from typing import Generic, List, Type, TypeVar

from mindbase.persistence.entities import ChatMessage, JournalEntry, MentalHealthResult, only_records
from mindbase.persistence.record_store import RecordStore, CHATS_KEY, JOURNAL_KEY, RESULTS_KEY

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrderingPolicy(enum.Enum):
    APPEND = "append"
    PREPEND_OR_REPLACE = "prepend_or_replace"


class UserCollectionRepository(Generic[T]):
    def __init__(self, store: RecordStore, key: str, entity_cls: Type[T], policy: OrderingPolicy) -> None:
        self.store = store
        self.key = key
        self.entity_cls = entity_cls
        self.policy = policy

    def _load_all(self) -> dict:
        data = self.store.read(self.key)
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("Clé %s mal formée (%s), traitée comme vide", self.key, type(data).__name__)
            return {}
        return data

    def _user_list(self, all_records: dict, user_id: str) -> list:
        records = all_records.get(user_id)
        if records is None:
            return []
        if not isinstance(records, list):
            logger.warning("Clé %s : liste de %s mal formée, traitée comme vide", self.key, user_id)
            return []
        return only_records(records, self.key, logger)

    def list(self, user_id: str) -> List[T]:
        records = self._user_list(self._load_all(), user_id)
        return [self.entity_cls.from_dict(d) for d in records]

    def save(self, user_id: str, record: T) -> None:
        all_records = self._load_all()
        records = self._user_list(all_records, user_id)
        payload = record.to_dict()

        if self.policy is OrderingPolicy.PREPEND_OR_REPLACE:
            idx = next((i for i, d in enumerate(records) if d.get("id") == payload["id"]), None)
            if idx is not None:
                records[idx] = payload
            else:
                records.insert(0, payload)  # le plus récent en tête
        else:
            records.append(payload)

        all_records[user_id] = records
        self.store.write(self.key, all_records)


def chat_repository(store: RecordStore) -> UserCollectionRepository[ChatMessage]:
    return UserCollectionRepository(store, CHATS_KEY, ChatMessage, OrderingPolicy.APPEND)


def journal_repository(store: RecordStore) -> UserCollectionRepository[JournalEntry]:
    return UserCollectionRepository(store, JOURNAL_KEY, JournalEntry, OrderingPolicy.PREPEND_OR_REPLACE)


def results_repository(store: RecordStore) -> UserCollectionRepository[MentalHealthResult]:
    return UserCollectionRepository(store, RESULTS_KEY, MentalHealthResult, OrderingPolicy.APPEND)
