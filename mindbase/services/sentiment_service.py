# mindbase/services/sentiment_service.py
# -*- coding: utf-8 -*-
"""
Analyse des émotions d'une entrée de journal + humeur collective.

Providers :
- StubEmotionProvider        : offline, déterministe (lexique simple), idéal pour tests.
- HuggingFaceEmotionProvider : Inference API, modèle SamLowe/roberta-base-go_emotions.

La façade `SentimentService.analyze()` ne lève jamais : en cas de problème elle
renvoie une étiquette sentinelle (["Neutral"], ["model loading..."], ["analysis error"]).

Usage:
    from mindbase.services.sentiment_service import SentimentService, get_collective_mood

    svc = SentimentService()            # hf si HF_TOKEN, sinon ["Neutral"]
    emotions = svc.analyze("Great day at the beach with friends")
    mood = get_collective_mood(journal_entries)
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Optional

import httpx

logger = logging.getLogger(__name__)

NEUTRAL = "Neutral"
MODEL_LOADING = "model loading..."
ANALYSIS_ERROR = "analysis error"

# Étiquettes techniques ignorées dans l'humeur collective
IGNORED_LABEL_MARKERS = ("error", "loading", "missing")

TOP_N = 2


# -----------------------------------------------------------------------------
# Humeur collective
# -----------------------------------------------------------------------------

def get_collective_mood(entries: Iterable, window: int = 7) -> str:
    """
    Émotion dominante sur les `window` entrées les plus récentes.

    `entries` est la liste du journal (plus récente en tête). Les étiquettes sont
    normalisées (minuscules, sans espaces) ; à égalité, la première comptée gagne.
    """
    recent = list(entries)[:window]
    if not recent:
        return NEUTRAL

    counts: Dict[str, int] = {}
    for entry in recent:
        for emotion in entry.emotions:
            e = emotion.lower().strip()
            if any(marker in e for marker in IGNORED_LABEL_MARKERS):
                continue
            counts[e] = counts.get(e, 0) + 1

    if not counts:
        return NEUTRAL

    dominant, best = "", 0
    for emotion, count in counts.items():  # ordre d'insertion = ordre de comptage
        if count > best:
            dominant, best = emotion, count

    return dominant[:1].upper() + dominant[1:]


# -----------------------------------------------------------------------------
# Provider: Stub (déterministe, offline)
# -----------------------------------------------------------------------------

class StubEmotionProvider:
    """Repère quelques mots-clés et renvoie au plus TOP_N étiquettes go_emotions."""

    LEXICON: Dict[str, tuple] = {
        "joy": ("happy", "joy", "great", "glad", "wonderful", "fun"),
        "gratitude": ("thank", "grateful", "gratitude"),
        "sadness": ("sad", "cry", "lonely", "down", "miss"),
        "nervousness": ("anxious", "nervous", "worried", "worry", "panic"),
        "anger": ("angry", "furious", "mad", "annoyed"),
        "fear": ("afraid", "scared", "fear"),
        "optimism": ("hope", "hopeful", "better", "looking forward"),
    }

    def analyze(self, text: str) -> List[str]:
        lowered = text.lower()
        scored = []
        for label, words in self.LEXICON.items():
            hits = sum(lowered.count(w) for w in words)
            if hits:
                scored.append((hits, label))
        if not scored:
            return ["neutral"]
        scored.sort(key=lambda t: t[0], reverse=True)  # tri stable : ordre du lexique à égalité
        return [label for _, label in scored[:TOP_N]]


class UnconfiguredEmotionProvider:
    """Aucune clé HF : étiquette neutre, sans appel réseau."""

    def analyze(self, text: str) -> List[str]:
        logger.warning("HF_TOKEN manquant : analyse des émotions désactivée.")
        return [NEUTRAL]


# -----------------------------------------------------------------------------
# Provider: Hugging Face Inference API
# -----------------------------------------------------------------------------

class HuggingFaceEmotionProvider:
    """
    Client pour le classifieur d'émotions Hugging Face.

    Variables d'environnement supportées:
        HF_TOKEN           : token secret (obligatoire)
        HF_EMOTION_MODEL   : par défaut 'SamLowe/roberta-base-go_emotions'
        HF_API_URL         : URL override; sinon déduite du modèle
        HF_TIMEOUT_SEC     : int/float (par défaut 12)

    Notes:
        - 503 (modèle en cours de chargement) -> ["model loading..."]
        - Les autres erreurs HTTP/réseau sont relevées ; la façade les absorbe.
    """

    def __init__(self) -> None:
        self.token = os.getenv("HF_TOKEN", "").strip()
        if not self.token:
            raise RuntimeError("HF_TOKEN manquant pour HuggingFaceEmotionProvider.")

        self.model = os.getenv("HF_EMOTION_MODEL", "SamLowe/roberta-base-go_emotions").strip()
        self.api_url = os.getenv("HF_API_URL", f"https://router.huggingface.co/models/{self.model}").strip()
        self.timeout_sec = float(os.getenv("HF_TIMEOUT_SEC", "12"))

        self._headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def analyze(self, text: str) -> List[str]:
        with httpx.Client(timeout=self.timeout_sec) as client:
            resp = client.post(self.api_url, headers=self._headers, json={"inputs": text})
            if resp.status_code == 503:
                return [MODEL_LOADING]
            resp.raise_for_status()
            data = resp.json()

        # Format usuel : [[{"label": "joy", "score": 0.9}, ...]]
        if isinstance(data, list) and data and isinstance(data[0], list):
            predictions = sorted(data[0], key=lambda p: p.get("score", 0.0), reverse=True)
            return [p["label"] for p in predictions[:TOP_N]]

        return ["neutral"]


# -----------------------------------------------------------------------------
# Façade principale
# -----------------------------------------------------------------------------

class SentimentService:
    """
    Façade qui choisit le provider selon l'environnement :
      - SENTIMENT_PROVIDER=stub -> StubEmotionProvider
      - sinon (hf, défaut)      -> HuggingFaceEmotionProvider si HF_TOKEN,
                                   sinon UnconfiguredEmotionProvider
    """

    def __init__(self, provider: Optional[object] = None) -> None:
        if provider is not None:
            self._provider = provider
            return

        prov = os.getenv("SENTIMENT_PROVIDER", "hf").strip().lower()
        if prov == "stub":
            self._provider = StubEmotionProvider()
            return
        try:
            self._provider = HuggingFaceEmotionProvider()
        except RuntimeError:
            self._provider = UnconfiguredEmotionProvider()

    def analyze(self, text: str) -> List[str]:
        try:
            return self._provider.analyze(text)
        except Exception as e:
            logger.error("Sentiment Analysis Failed: %s", e)
            return [ANALYSIS_ERROR]
