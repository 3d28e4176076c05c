# tests/test_sentiment_service.py
# -*- coding: utf-8 -*-
"""
Tests pour mindbase/services/sentiment_service.py

Ce fichier couvre :
1) get_collective_mood : fenêtre des 7 plus récentes, filtrage des étiquettes techniques,
   "Neutral" par défaut, égalité -> première comptée, capitalisation.
2) StubEmotionProvider : étiquettes déterministes.
3) SentimentService (façade) : choix du provider, fallback sans token, absorption des erreurs.
4) HuggingFaceEmotionProvider : via un faux `httpx` (AUCUN appel réseau réel).
"""

from __future__ import annotations

import types

import pytest

import mindbase.services.sentiment_service as sentiment_svc
from mindbase.persistence.entities import JournalEntry
from mindbase.services.sentiment_service import (
    HuggingFaceEmotionProvider,
    SentimentService,
    StubEmotionProvider,
    UnconfiguredEmotionProvider,
    get_collective_mood,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ["SENTIMENT_PROVIDER", "HF_TOKEN", "HF_EMOTION_MODEL", "HF_API_URL", "HF_TIMEOUT_SEC"]:
        monkeypatch.delenv(key, raising=False)
    yield


def entry(*emotions):
    return JournalEntry(id="x", user_id="u", title="t", content="c", timestamp=0, emotions=list(emotions))


# ---------------------------------------------------------------------
# 1) Humeur collective
# ---------------------------------------------------------------------

def test_collective_mood_empty_is_neutral():
    assert get_collective_mood([]) == "Neutral"


def test_collective_mood_most_frequent_capitalized():
    entries = [entry("joy", "sadness"), entry("Joy "), entry("fear")]
    assert get_collective_mood(entries) == "Joy"


def test_collective_mood_only_last_seven_entries():
    # liste plus récente en tête : les 7 premières seules comptent
    recent = [entry("calm") for _ in range(7)]
    older = [entry("anger") for _ in range(10)]
    assert get_collective_mood(recent + older) == "Calm"


def test_collective_mood_ignores_sentinel_labels():
    entries = [entry("analysis error"), entry("model loading..."), entry("key missing", "relief")]
    assert get_collective_mood(entries) == "Relief"


def test_collective_mood_only_sentinels_is_neutral():
    entries = [entry("analysis error"), entry("model loading...")]
    assert get_collective_mood(entries) == "Neutral"


def test_collective_mood_entries_without_labels_is_neutral():
    assert get_collective_mood([entry(), entry()]) == "Neutral"


def test_collective_mood_tie_first_counted_wins():
    assert get_collective_mood([entry("sadness", "joy"), entry("joy", "sadness")]) == "Sadness"


# ---------------------------------------------------------------------
# 2) Stub
# ---------------------------------------------------------------------

def test_stub_detects_keywords_top_two():
    labels = StubEmotionProvider().analyze("So happy and grateful, thank you! Great fun.")
    assert labels == ["joy", "gratitude"]


def test_stub_neutral_when_no_keyword():
    assert StubEmotionProvider().analyze("Went to the post office.") == ["neutral"]


# ---------------------------------------------------------------------
# 3) Façade
# ---------------------------------------------------------------------

def test_service_without_token_returns_neutral():
    svc = SentimentService()
    assert isinstance(svc._provider, UnconfiguredEmotionProvider)
    assert svc.analyze("anything") == ["Neutral"]


def test_service_env_forces_stub(monkeypatch):
    monkeypatch.setenv("SENTIMENT_PROVIDER", "stub")
    assert isinstance(SentimentService()._provider, StubEmotionProvider)


def test_service_absorbs_provider_errors():
    class Boom:
        def analyze(self, text):
            raise RuntimeError("kaboom")

    assert SentimentService(provider=Boom()).analyze("x") == ["analysis error"]


# ---------------------------------------------------------------------
# 4) Hugging Face (faux httpx)
# ---------------------------------------------------------------------

class _FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")


class _FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def post(self, url, headers=None, json=None):
        self.calls.append((url, headers, json))
        return self.response


def _install_fake_httpx(monkeypatch, response):
    client = _FakeClient(response)
    monkeypatch.setattr(sentiment_svc, "httpx", types.SimpleNamespace(Client=lambda timeout=None: client))
    return client


def test_hf_top_two_labels_by_score(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "dummy")
    payload = [[
        {"label": "neutral", "score": 0.1},
        {"label": "joy", "score": 0.7},
        {"label": "excitement", "score": 0.2},
    ]]
    client = _install_fake_httpx(monkeypatch, _FakeResponse(payload))

    svc = SentimentService()
    assert isinstance(svc._provider, HuggingFaceEmotionProvider)
    assert svc.analyze("What a day!") == ["joy", "excitement"]

    url, headers, body = client.calls[0]
    assert url == "https://router.huggingface.co/models/SamLowe/roberta-base-go_emotions"
    assert headers["Authorization"] == "Bearer dummy"
    assert body == {"inputs": "What a day!"}


def test_hf_model_loading(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "dummy")
    _install_fake_httpx(monkeypatch, _FakeResponse({"error": "loading"}, status_code=503))
    assert SentimentService().analyze("x") == ["model loading..."]


def test_hf_unexpected_shape_is_neutral(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "dummy")
    _install_fake_httpx(monkeypatch, _FakeResponse({"weird": True}))
    assert SentimentService().analyze("x") == ["neutral"]


def test_hf_http_error_becomes_analysis_error(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "dummy")
    _install_fake_httpx(monkeypatch, _FakeResponse({}, status_code=500))
    assert SentimentService().analyze("x") == ["analysis error"]


def test_hf_provider_raises_when_used_directly(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "dummy")
    _install_fake_httpx(monkeypatch, _FakeResponse({}, status_code=500))
    with pytest.raises(RuntimeError):
        HuggingFaceEmotionProvider().analyze("x")
