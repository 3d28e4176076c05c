# mindbase/pages/4_SOS.py
# -*- coding: utf-8 -*-

# --- bootstrap import path (page streamlit dans mindbase/pages) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -------------------------------------------------------------

import streamlit as st

from mindbase.services.crisis import EMERGENCY, HELPLINES, REASSURANCE

# Page accessible sans connexion
st.set_page_config(page_title="SOS — MindBase", page_icon="🆘", layout="centered")
st.title("🆘 " + EMERGENCY.title)

st.error(EMERGENCY.description)
st.link_button(f"📞 Call {EMERGENCY.number}", EMERGENCY.tel_link, type="primary")

cols = st.columns(len(HELPLINES))
for col, contact in zip(cols, HELPLINES):
    with col:
        with st.container(border=True):
            st.subheader(contact.title)
            st.write(contact.description)
            st.code(contact.number, language=None)

st.info(REASSURANCE)
