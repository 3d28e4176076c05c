# mindbase/services/chat_service.py
# -*- coding: utf-8 -*-
"""
Compagnon conversationnel de MindBase.

Deux providers :
- StubProvider   : offline, déterministe, idéal pour tests/MVP.
- GeminiProvider : API REST Gemini `generateContent` (si GEMINI_API_KEY présent).

La façade `ChatService.reply()` ne lève jamais : toute erreur est remplacée par un
message d'excuse.

Usage:
    from mindbase.services.chat_service import ChatService

    svc = ChatService()  # auto: stub si pas de clé
    txt = svc.reply(history=messages, message="I feel tired", user_name="Ada", user_bio=None)
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence

import httpx

from mindbase.persistence.entities import ChatMessage

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 20

EMPTY_REPLY = "I'm listening, please go on."
FALLBACK_REPLY = "I apologize, I'm having trouble processing that right now. Could you try again?"

CRISIS_WORDS = ("suicide", "kill myself", "end my life", "self-harm", "hurt myself")


def build_system_instruction(user_name: str, user_bio: Optional[str] = None) -> str:
    bio = user_bio or "The user has not provided a bio yet."
    return (
        "You are MindBase, a compassionate, supportive, and empathetic mental health companion.\n"
        f"Your user is named {user_name}.\n\n"
        "User's Personal Background/Bio:\n"
        f'"{bio}"\n\n'
        "Use this background information to personalize your advice and understanding of their situation.\n"
        "For example, if the bio mentions specific struggles or interests, reference them gently where appropriate.\n\n"
        "Provide supportive, non-judgmental responses.\n"
        "If the user seems in immediate danger, strictly advise them to seek professional help "
        "or call emergency services immediately.\n"
        "Keep responses concise but warm."
    )


def recent_history(history: Sequence[ChatMessage], window: int = HISTORY_WINDOW) -> List[ChatMessage]:
    """Derniers `window` messages, en ordre chronologique."""
    return list(history)[-window:] if window > 0 else []


# -----------------------------------------------------------------------------
# Provider: Stub (déterministe, offline)
# -----------------------------------------------------------------------------

class StubProvider:
    """Réponse courte sans aucun appel réseau."""

    def generate(self, *, history: Sequence[ChatMessage], message: str, system_instruction: str,
                 user_name: str) -> str:
        lowered = message.lower()
        if any(w in lowered for w in CRISIS_WORDS):
            return (
                f"{user_name}, I'm really glad you told me. Please reach out to emergency services (112) "
                "or a crisis helpline right now, you don't have to go through this alone."
            )
        if not message.strip():
            return EMPTY_REPLY
        if len(history) == 0:
            return f"Hi {user_name}, thank you for sharing. How long have you been feeling this way?"
        return f"That sounds important, {user_name}. Would you like to tell me more about it?"


# -----------------------------------------------------------------------------
# Provider: Gemini (REST)
# -----------------------------------------------------------------------------

class GeminiProvider:
    """
    Client simple pour l'API Gemini.

    Variables d'environnement supportées:
        GEMINI_API_KEY      : clé secrète (obligatoire)
        GEMINI_MODEL        : par défaut 'gemini-2.5-flash'
        GEMINI_API_URL      : URL override; sinon déduite du modèle
        GEMINI_TIMEOUT_SEC  : int/float (par défaut 20)

    Notes:
        - S'il y a la moindre erreur réseau, on relève l'exception afin que la
          façade renvoie le message d'excuse.
    """

    def __init__(self) -> None:
        self.api_key = os.getenv("GEMINI_API_KEY", "").strip()
        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY manquant pour GeminiProvider.")

        self.model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip()
        self.api_url = os.getenv(
            "GEMINI_API_URL",
            f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent",
        ).strip()
        self.timeout_sec = float(os.getenv("GEMINI_TIMEOUT_SEC", "20"))

        self._headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def _build_payload(self, *, history: Sequence[ChatMessage], message: str, system_instruction: str) -> dict:
        contents = [{"role": m.role, "parts": [{"text": m.text}]} for m in history]
        contents.append({"role": "user", "parts": [{"text": message}]})
        return {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": contents,
        }

    def generate(self, *, history: Sequence[ChatMessage], message: str, system_instruction: str,
                 user_name: str) -> str:
        payload = self._build_payload(history=history, message=message, system_instruction=system_instruction)

        with httpx.Client(timeout=self.timeout_sec) as client:
            resp = client.post(self.api_url, headers=self._headers, json=payload)
            resp.raise_for_status()
            data = resp.json()

        # {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
        if not isinstance(data, dict) or not data.get("candidates"):
            return ""
        candidates = data["candidates"]
        if not isinstance(candidates, list):
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts).strip()


# -----------------------------------------------------------------------------
# Façade principale
# -----------------------------------------------------------------------------

class ChatService:
    """
    Façade qui choisit automatiquement le provider selon l'environnement :
      - AI_PROVIDER=gemini -> GeminiProvider (si GEMINI_API_KEY présent)
      - sinon              -> StubProvider (par défaut)

    On peut forcer un provider en passant `provider=...` dans __init__.
    """

    def __init__(self, provider: Optional[object] = None) -> None:
        if provider is not None:
            self._provider = provider
            return

        prov = os.getenv("AI_PROVIDER", "stub").strip().lower()
        if prov == "gemini":
            try:
                self._provider = GeminiProvider()
            except RuntimeError as e:
                logger.warning("Gemini non configuré (%s), repli sur le stub.", e)
                self._provider = StubProvider()
        else:
            self._provider = StubProvider()

    def reply(
        self,
        *,
        history: Sequence[ChatMessage],
        message: str,
        user_name: str,
        user_bio: Optional[str] = None,
    ) -> str:
        """
        Génère la réponse du compagnon.

        Args:
            history: messages précédents (ordre chronologique), hors nouveau message
            message: nouveau message de l'utilisateur
            user_name / user_bio: personnalisation de l'instruction système

        Returns:
            str: réponse prête à afficher (jamais d'exception)
        """
        try:
            text = self._provider.generate(
                history=recent_history(history),
                message=message,
                system_instruction=build_system_instruction(user_name, user_bio),
                user_name=user_name,
            )
        except Exception as e:
            logger.error("Chat Error: %s", e)
            return FALLBACK_REPLY
        return text or EMPTY_REPLY
