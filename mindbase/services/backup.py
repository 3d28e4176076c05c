# mindbase/services/backup.py
# -*- coding: utf-8 -*-
"""
Sauvegarde / restauration complète du store au format JSON.

Document de sauvegarde :
    {
      "users": [...], "currentUser": "<id>" | null,
      "chats": {...}, "journals": {...}, "results": {...},
      "timestamp": "2025-01-01T10:00:00.000Z"
    }

Notes:
    - La sauvegarde lit les clés brutes du store (sans passer par les repositories).
    - La restauration est conditionnée au parsing + présence de `timestamp`, puis
      écrase chaque clé présente (ni nulle ni chaîne vide) ; les autres restent intactes.
    - Aucune re-validation (ex. unicité des emails) : fidélité à la sauvegarde.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from mindbase.persistence.entities import now_iso
from mindbase.persistence.record_store import (
    RecordStore,
    USERS_KEY,
    CURRENT_USER_KEY,
    CHATS_KEY,
    JOURNAL_KEY,
    RESULTS_KEY,
)

logger = logging.getLogger(__name__)

# champ du document -> clé du store
FIELD_KEYS: Dict[str, str] = {
    "users": USERS_KEY,
    "currentUser": CURRENT_USER_KEY,
    "chats": CHATS_KEY,
    "journals": JOURNAL_KEY,
    "results": RESULTS_KEY,
}


class InvalidBackupFormat(ValueError):
    """Document illisible ou sans `timestamp`."""


class BackupService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def create_backup_document(self) -> Dict[str, Any]:
        doc = {field: self.store.read(key) for field, key in FIELD_KEYS.items()}
        doc["timestamp"] = now_iso()
        return doc

    def create_backup(self) -> str:
        return json.dumps(self.create_backup_document(), indent=2, ensure_ascii=False)

    @staticmethod
    def backup_filename(today: Optional[dt.date] = None) -> str:
        day = today or dt.date.today()
        return f"mindbase_backup_{day.isoformat()}.json"

    @staticmethod
    def parse(data: Union[str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
        """Parse et valide un document. Lève InvalidBackupFormat."""
        if isinstance(data, (bytes, bytearray)):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidBackupFormat(f"Encodage invalide: {e}") from e
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise InvalidBackupFormat(f"JSON invalide: {e}") from e
        if not isinstance(data, Mapping):
            raise InvalidBackupFormat("Le document doit être un objet JSON")
        if not data.get("timestamp"):
            raise InvalidBackupFormat("Invalid backup file: timestamp manquant")
        return dict(data)

    def restore_backup(self, data: Union[str, bytes, Mapping[str, Any]]) -> bool:
        """
        Restaure un document de sauvegarde.

        Returns:
            bool: True si appliqué, False si le document est invalide
                  (dans ce cas le store n'est pas modifié).
        """
        try:
            doc = self.parse(data)
            updates = {key: doc[field] for field, key in FIELD_KEYS.items() if doc.get(field) not in (None, "")}
            self.store.write_many(updates)
        except Exception as e:
            logger.error("Restore failed: %s", e)
            return False

        logger.info("Sauvegarde du %s restaurée (%s)", doc["timestamp"], ", ".join(sorted(updates)) or "aucune clé")
        return True
