# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Fixtures partagées : un RecordStore sur une base SQLite temporaire par test.

- `store`       : DB_URL -> fichier temporaire, modules db/models/record_store rechargés
- `other_store` : second store indépendant (autre fichier), pour les restaurations
"""

import importlib

import pytest


@pytest.fixture
def store(tmp_path, monkeypatch):
    db_path = tmp_path / "test_mindbase.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path}")

    # (Re)charger les modules d'infra pour régénérer l'engine et les tables
    import mindbase.persistence.db as db
    import mindbase.persistence.models as models
    import mindbase.persistence.record_store as record_store
    importlib.reload(db)
    importlib.reload(models)
    importlib.reload(record_store)

    db.init_db(models.Base, drop_and_recreate=True)
    return record_store.RecordStore()


@pytest.fixture
def other_store(store, tmp_path):
    import mindbase.persistence.db as db
    import mindbase.persistence.models as models
    import mindbase.persistence.record_store as record_store

    factory = db.build_session_factory(f"sqlite:///{tmp_path / 'other_mindbase.db'}", models.Base)
    return record_store.RecordStore(session_factory=factory)
