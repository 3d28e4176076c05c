# scripts/seed_local_data.py
# -*- coding: utf-8 -*-
"""
Seed local pour MindBase : crée des utilisateurs, des entrées de journal, des
conversations et des résultats de questionnaire réalistes.

Caractéristiques :
- Réexécutable : un email déjà inscrit est réutilisé (pas de doublon d'utilisateur)
- Paramétrable via CLI : nb d'utilisateurs, nb d'entrées, mot de passe commun
- Émotions via SentimentService (stub par défaut, HF si --with-ai et HF_TOKEN)
- Option (--wipe) pour drop+recreate le schéma (utile en dev)
- Option (--backup FICHIER) pour exporter le résultat au format de sauvegarde

Exemples :
    # 3 users, 10 entrées chacun
    python scripts/seed_local_data.py

    # 5 users, 20 entrées, analyse HF si configurée, export JSON
    python scripts/seed_local_data.py --users 5 --entries 20 --with-ai --backup seed.json

    # Recommencer à zéro
    python scripts/seed_local_data.py --wipe
"""

from __future__ import annotations

import argparse
import datetime as dt
import random

from mindbase.errors import EmailTaken
from mindbase.persistence.db import init_db
from mindbase.persistence.entities import ChatMessage, JournalEntry, new_id
from mindbase.persistence.models import Base
from mindbase.persistence.record_store import RecordStore
from mindbase.persistence.repositories.collections_repo import (
    chat_repository,
    journal_repository,
    results_repository,
)
from mindbase.services.backup import BackupService
from mindbase.services.chat_service import ChatService, StubProvider
from mindbase.services.screening import QUESTIONS, build_result
from mindbase.services.sentiment_service import SentimentService, StubEmotionProvider
from mindbase.services.session import SessionManager


SAMPLE_ENTRIES = [
    ("Beach day", "Great day at the beach with friends, I feel happy and grateful."),
    ("Deadline", "Worried about the project deadline, a bit anxious tonight."),
    ("Quiet evening", "Read a book and went to bed early."),
    ("Bad news", "Got some sad news today, feeling down and lonely."),
    ("Traffic", "So annoyed by the traffic, I was angry all morning."),
    ("New start", "Hopeful about the new job, things are getting better."),
]

SAMPLE_PROMPTS = [
    "I couldn't sleep well last night.",
    "Work has been stressful lately.",
    "Today was actually a good day.",
]


# -------------------------------------------------------------------
# Seeding
# -------------------------------------------------------------------

def seed(
    *,
    users: int,
    entries: int,
    email_prefix: str,
    domain: str,
    password: str,
    with_ai: bool,
) -> RecordStore:
    """
    Remplit le store avec `users` utilisateurs ayant chacun `entries` entrées de journal,
    quelques échanges de chat et 1 à 3 résultats de questionnaire.
    """
    store = RecordStore()
    session = SessionManager(store)
    journals = journal_repository(store)
    chats = chat_repository(store)
    results = results_repository(store)

    sentiment = SentimentService() if with_ai else SentimentService(provider=StubEmotionProvider())
    companion = ChatService() if with_ai else ChatService(provider=StubProvider())

    print(f"➡️  Seeding {users} user(s), {entries} entrée(s) chacun | AI={'on' if with_ai else 'off'}")

    now_ms = int(dt.datetime.now(dt.timezone.utc).timestamp() * 1000)
    total = 0
    for i in range(1, users + 1):
        email = f"{email_prefix}{i}@{domain}"
        try:
            u = session.register(name=f"{email_prefix.title()} {i}", email=email, password=password)
        except EmailTaken:
            u = session.users.find_by_email(email)
        print(f"   • {u.id}  {u.email:<30}")

        # du plus ancien au plus récent : le repository garde le plus récent en tête
        for k in range(entries):
            title, content = random.choice(SAMPLE_ENTRIES)
            entry = JournalEntry(
                id=new_id(),
                user_id=u.id,
                title=title,
                content=content,
                timestamp=now_ms - (entries - k) * 86_400_000,
                emotions=sentiment.analyze(content),
                is_analyzed=True,
            )
            journals.save(u.id, entry)
            total += 1

        history = chats.list(u.id)
        for prompt in random.sample(SAMPLE_PROMPTS, k=2):
            msg = ChatMessage.create("user", prompt)
            chats.save(u.id, msg)
            reply = companion.reply(history=history, message=prompt, user_name=u.name, user_bio=u.bio)
            chats.save(u.id, ChatMessage.create("model", reply))
            history = chats.list(u.id)

        for _ in range(random.randint(1, 3)):
            answers = [random.randint(0, 3) for _ in QUESTIONS]
            results.save(u.id, build_result(u.id, answers))

    print(f"✅ Terminé : {users} user(s), {total} entrée(s) de journal créées.")
    return store


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------

def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed local data for MindBase")
    p.add_argument("--users", type=int, default=3, help="Nombre d'utilisateurs (défaut: 3)")
    p.add_argument("--entries", type=int, default=10, help="Entrées de journal par utilisateur (défaut: 10)")
    p.add_argument("--email-prefix", type=str, default="user", help="Préfixe email (défaut: 'user')")
    p.add_argument("--domain", type=str, default="example.com", help="Domaine email (défaut: example.com)")
    p.add_argument("--password", type=str, default="password", help="Mot de passe commun (défaut: 'password')")
    p.add_argument("--seed", type=int, default=None, help="Seed du générateur aléatoire pour reproductibilité")
    p.add_argument("--with-ai", action="store_true", help="Utiliser les services configurés (Gemini/HF selon env)")
    p.add_argument("--wipe", action="store_true", help="Drop + recreate la base avant seeding")
    p.add_argument("--backup", type=str, default=None, help="Écrire une sauvegarde JSON dans ce fichier")
    return p.parse_args()


def main():
    args = parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    if args.wipe:
        print("⚠️  Wipe : drop & recreate le schéma…")

    init_db(Base, drop_and_recreate=bool(args.wipe))

    store = seed(
        users=max(1, args.users),
        entries=max(0, args.entries),
        email_prefix=args.email_prefix,
        domain=args.domain,
        password=args.password,
        with_ai=bool(args.with_ai),
    )

    if args.backup:
        with open(args.backup, "w", encoding="utf-8") as f:
            f.write(BackupService(store).create_backup())
        print(f"💾 Sauvegarde écrite dans {args.backup}")


if __name__ == "__main__":
    main()
