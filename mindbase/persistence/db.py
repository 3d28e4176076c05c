# mindbase/persistence/db.py
# -*- coding: utf-8 -*-
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager
import os

DB_URL = os.getenv("DB_URL", "sqlite:///mindbase.db")

engine = create_engine(DB_URL, echo=False, future=True)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

@contextmanager
def get_session(factory=None):
    """Contexte gérant automatiquement commit/rollback."""
    s = (factory or SessionLocal)()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()

def init_db(Base, drop_and_recreate=False):
    """Crée les tables (et les recrée si demandé)."""
    if drop_and_recreate:
        Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

def build_session_factory(url: str, Base):
    """
    Fabrique une session factory indépendante (autre fichier SQLite, autre store).
    Utile pour restaurer une sauvegarde dans une base vierge.
    """
    other = create_engine(url, echo=False, future=True)
    Base.metadata.create_all(other)
    return sessionmaker(bind=other, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
