# mindbase/persistence/entities.py
# -*- coding: utf-8 -*-
"""
Entités stockées dans le store clé/valeur.

Chaque entité se convertit vers/depuis le format JSON persisté (clés camelCase,
identiques au format des sauvegardes) via `to_dict()` / `from_dict()`.
"""

from __future__ import annotations

import datetime as dt
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    """Horodatage ISO-8601 UTC, au format `2025-01-01T10:00:00.000Z`."""
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_ms() -> int:
    """Epoch en millisecondes (horodatage des messages et entrées de journal)."""
    return int(time.time() * 1000)


def _as_labels(value: Any) -> List[str]:
    # une chaîne seule n'est pas une liste d'étiquettes
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def only_records(items: List[Any], key: str, logger) -> List[Dict[str, Any]]:
    """Garde les éléments dict d'une liste stockée ; les autres sont journalisés et ignorés."""
    kept = [d for d in items if isinstance(d, dict)]
    if len(kept) != len(items):
        logger.warning("Clé %s : %d élément(s) mal formé(s) ignoré(s)", key, len(items) - len(kept))
    return kept


@dataclass
class User:
    id: str
    name: str
    email: str
    password: Optional[str] = None  # texte clair : pas de sécurité ici
    bio: Optional[str] = None
    joined_at: str = ""
    last_login: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "joinedAt": self.joined_at,
        }
        if self.password is not None:
            d["password"] = self.password
        if self.bio is not None:
            d["bio"] = self.bio
        if self.last_login is not None:
            d["lastLogin"] = self.last_login
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "User":
        return cls(
            id=d.get("id", ""),
            name=d.get("name", ""),
            email=d.get("email", ""),
            password=d.get("password"),
            bio=d.get("bio"),
            joined_at=d.get("joinedAt", ""),
            last_login=d.get("lastLogin"),
        )


@dataclass
class ChatMessage:
    id: str
    role: str  # "user" | "model"
    text: str
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "role": self.role, "text": self.text, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ChatMessage":
        return cls(id=d.get("id", ""), role=d.get("role", "user"), text=d.get("text", ""),
                   timestamp=_as_int(d.get("timestamp", 0)))

    @classmethod
    def create(cls, role: str, text: str) -> "ChatMessage":
        if role not in ("user", "model"):
            raise ValueError(f"Rôle inconnu: {role}")
        return cls(id=new_id(), role=role, text=text, timestamp=now_ms())


@dataclass
class JournalEntry:
    id: str
    user_id: str
    title: str
    content: str
    timestamp: int
    emotions: List[str] = field(default_factory=list)
    is_analyzed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "timestamp": self.timestamp,
            "emotions": list(self.emotions),
            "isAnalyzed": self.is_analyzed,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "JournalEntry":
        return cls(
            id=d.get("id", ""),
            user_id=d.get("userId", ""),
            title=d.get("title", ""),
            content=d.get("content", ""),
            timestamp=_as_int(d.get("timestamp", 0)),
            emotions=_as_labels(d.get("emotions")),
            is_analyzed=bool(d.get("isAnalyzed", False)),
        )

    @classmethod
    def create(cls, user_id: str, title: str, content: str, emotions: Optional[List[str]] = None) -> "JournalEntry":
        return cls(
            id=new_id(),
            user_id=user_id,
            title=title,
            content=content,
            timestamp=now_ms(),
            emotions=list(emotions or []),
            is_analyzed=emotions is not None,
        )


@dataclass
class MentalHealthResult:
    id: str
    user_id: str
    date: str
    score: int
    interpretation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date,
            "score": self.score,
            "interpretation": self.interpretation,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MentalHealthResult":
        return cls(
            id=d.get("id", ""),
            user_id=d.get("userId", ""),
            date=d.get("date", ""),
            score=_as_int(d.get("score", 0)),
            interpretation=d.get("interpretation", ""),
        )
