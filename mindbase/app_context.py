# mindbase/app_context.py
# -*- coding: utf-8 -*-
"""Bootstrapping commun aux pages Streamlit (DB, store, session, logging)."""

from dataclasses import dataclass

import streamlit as st
from dotenv import load_dotenv

# .env chargé avant db.py (DB_URL lu à l'import)
load_dotenv()

from mindbase.persistence.db import init_db
from mindbase.persistence.models import Base
from mindbase.persistence.record_store import RecordStore
from mindbase.persistence.repositories.collections_repo import (
    UserCollectionRepository,
    chat_repository,
    journal_repository,
    results_repository,
)
from mindbase.services.backup import BackupService
from mindbase.services.session import SessionManager
from mindbase.utils.logger import configure_logging


@dataclass
class AppContext:
    store: RecordStore
    session: SessionManager
    chats: UserCollectionRepository
    journals: UserCollectionRepository
    results: UserCollectionRepository
    backup: BackupService


@st.cache_resource
def get_context() -> AppContext:
    configure_logging("mindbase")
    init_db(Base, drop_and_recreate=False)

    store = RecordStore()
    session = SessionManager(store)
    session.init()
    return AppContext(
        store=store,
        session=session,
        chats=chat_repository(store),
        journals=journal_repository(store),
        results=results_repository(store),
        backup=BackupService(store),
    )


def require_user(ctx: AppContext):
    """Utilisateur courant, ou arrêt de la page avec un message."""
    user = ctx.session.current_user()
    if user is None:
        st.warning("Please log in from the home page first.")
        st.stop()
    st.sidebar.caption(f"Logged in as **{user.name}** ({user.email})")
    return user
