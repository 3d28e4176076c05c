# mindbase/pages/1_Journal.py
# -*- coding: utf-8 -*-

# --- bootstrap import path (page streamlit dans mindbase/pages) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -------------------------------------------------------------

import datetime as dt
import pandas as pd
import streamlit as st
import altair as alt

from mindbase.app_context import get_context, require_user
from mindbase.persistence.entities import JournalEntry
from mindbase.services.sentiment_service import SentimentService, get_collective_mood

ctx = get_context()

st.set_page_config(page_title="Journal — MindBase", page_icon="📓", layout="centered")
st.title("📓 Mood Journal")

user = require_user(ctx)
entries = ctx.journals.list(user.id)

st.markdown(f"Collective Mood (Last 7 Entries): **{get_collective_mood(entries)}**")

# --- Nouvelle entrée ---
with st.expander("➕ New Entry", expanded=not entries):
    with st.form("journal_form", clear_on_submit=True):
        title = st.text_input("Title", placeholder="Title of your entry...")
        content = st.text_area("Content", placeholder="How are you feeling today? Write your thoughts...", height=180)
        submitted = st.form_submit_button("Save & Analyze")

    if submitted:
        if not title.strip() or not content.strip():
            st.warning("Title and content are required.")
        else:
            with st.spinner("Analyzing emotions..."):
                emotions = SentimentService().analyze(content)
            ctx.journals.save(user.id, JournalEntry.create(user.id, title, content, emotions))
            st.rerun()

# --- Fréquence des émotions ---
if entries:
    counts = pd.DataFrame(
        [{"emotion": e.lower().strip()} for entry in entries for e in entry.emotions]
    )
    if not counts.empty:
        counts = counts.groupby("emotion", as_index=False).size().rename(columns={"size": "count"})
        chart = (
            alt.Chart(counts)
            .mark_bar()
            .encode(
                x=alt.X("count:Q", title="Occurrences"),
                y=alt.Y("emotion:N", sort="-x", title=""),
                tooltip=["emotion:N", "count:Q"],
            )
            .properties(height=220)
        )
        st.subheader("Emotions")
        st.altair_chart(chart, use_container_width=True)

# --- Liste (plus récente en tête) ---
if not entries:
    st.info("No entries yet. Start writing to track your mood.")
for entry in entries:
    with st.container(border=True):
        when = dt.datetime.fromtimestamp(entry.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        st.markdown(f"**{entry.title}**  \n_{when}_")
        st.write(entry.content)
        if entry.emotions:
            st.caption(" · ".join(entry.emotions))
