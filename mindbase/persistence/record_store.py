# mindbase/persistence/record_store.py
# -*- coding: utf-8 -*-
"""
Store clé/valeur : seule primitive d'E/S de MindBase.

Chaque clé contient une valeur JSON. Une valeur illisible est traitée comme absente
(journalisée en warning) ; elle sera écrasée à la prochaine écriture.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy import delete

from mindbase.persistence.db import get_session
from mindbase.persistence.models import StoredValue

logger = logging.getLogger(__name__)

# Clés persistées
USERS_KEY = "mindbase_users"
CURRENT_USER_KEY = "mindbase_current_user"
CHATS_KEY = "mindbase_chats"
JOURNAL_KEY = "mindbase_journals"
RESULTS_KEY = "mindbase_results"

ALL_KEYS = (USERS_KEY, CURRENT_USER_KEY, CHATS_KEY, JOURNAL_KEY, RESULTS_KEY)


class RecordStore:
    def __init__(self, session_factory=None) -> None:
        # None -> engine du module db (DB_URL)
        self._factory = session_factory

    def raw(self, key: str) -> Optional[str]:
        with get_session(self._factory) as s:
            row = s.get(StoredValue, key)
            return row.value if row is not None else None

    def read(self, key: str) -> Any:
        text = self.raw(key)
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            logger.warning("Valeur illisible pour la clé %r, traitée comme absente", key)
            return None

    def write(self, key: str, value: Any) -> None:
        self.write_many({key: value})

    def write_many(self, values: Dict[str, Any]) -> None:
        """Écrit plusieurs clés dans une seule transaction."""
        encoded = {k: json.dumps(v, ensure_ascii=False) for k, v in values.items()}
        with get_session(self._factory) as s:
            for key, text in encoded.items():
                row = s.get(StoredValue, key)
                if row is None:
                    s.add(StoredValue(key=key, value=text))
                else:
                    row.value = text

    def remove(self, key: str) -> None:
        with get_session(self._factory) as s:
            s.execute(delete(StoredValue).where(StoredValue.key == key))
