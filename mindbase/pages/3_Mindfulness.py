# mindbase/pages/3_Mindfulness.py
# -*- coding: utf-8 -*-

# --- bootstrap import path (page streamlit dans mindbase/pages) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -------------------------------------------------------------

import time
import streamlit as st

from mindbase.app_context import get_context, require_user
from mindbase.services.mindfulness import EXERCISES, BreathingTimer, format_duration, get_exercise

ctx = get_context()

st.set_page_config(page_title="Mindfulness — MindBase", page_icon="🌬️", layout="centered")
st.title("🌬️ Mindfulness")

require_user(ctx)

timer = st.session_state.get("timer")

if timer is None:
    for ex in EXERCISES:
        with st.container(border=True):
            st.subheader(ex.title)
            st.write(ex.description)
            st.caption(format_duration(ex.duration_seconds))
            if st.button("Start", key=f"start_{ex.id}"):
                t = BreathingTimer(get_exercise(ex.id))
                t.start()
                st.session_state["timer"] = t
                st.rerun()
    st.stop()

if st.button("← Back to exercises"):
    del st.session_state["timer"]
    st.rerun()

st.header(timer.exercise.title)

if timer.completed:
    st.success("Well done! Exercise complete.")
else:
    st.markdown(f"## {timer.display}")
    if timer.is_active:
        st.markdown(f"**{timer.step}**")

col1, col2 = st.columns(2)
with col1:
    if not timer.completed and st.button("Pause" if timer.is_active else "Play"):
        timer.toggle()
        st.rerun()
with col2:
    if st.button("Reset"):
        timer.reset()
        st.rerun()

# une seconde par exécution tant que le minuteur tourne
if timer.is_active:
    time.sleep(1)
    timer.tick()
    st.rerun()
