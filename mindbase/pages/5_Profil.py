# mindbase/pages/5_Profil.py
# -*- coding: utf-8 -*-

# --- bootstrap import path (page streamlit dans mindbase/pages) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -------------------------------------------------------------

from dataclasses import replace

import streamlit as st

from mindbase.app_context import get_context, require_user

ctx = get_context()

st.set_page_config(page_title="Profil — MindBase", page_icon="👤", layout="centered")
st.title("👤 Profile")

user = require_user(ctx)

# --- Informations ---
st.write(f"**Joined:** {user.joined_at[:10] or '—'}")
st.write(f"**Last login:** {(user.last_login or '—')[:16].replace('T', ' ')}")

with st.form("profile_form"):
    name = st.text_input("Name", value=user.name)
    email = st.text_input("Email", value=user.email)
    bio = st.text_area("Bio", value=user.bio or "", help="Used by the companion to personalize its answers")
    new_password = st.text_input("New password", type="password", help="Leave empty to keep the current one")
    saved = st.form_submit_button("Save Changes")

if saved:
    updated = replace(user, name=name, email=email, bio=bio)
    if new_password:
        updated = replace(updated, password=new_password)
    ctx.session.update_user(updated)
    st.success("Profile updated successfully!")

st.divider()

# --- Sauvegarde / restauration ---
st.subheader("💾 Data backup")
col1, col2 = st.columns(2)
with col1:
    st.download_button(
        "⬇️ Download backup",
        data=ctx.backup.create_backup(),
        file_name=ctx.backup.backup_filename(),
        mime="application/json",
    )
with col2:
    uploaded = st.file_uploader("Restore from file", type=["json"])
    if uploaded is not None and st.button("Restore"):
        if ctx.backup.restore_backup(uploaded.getvalue()):
            st.success("Data restored successfully!")
            st.rerun()
        else:
            st.error("Failed to restore data. Invalid file.")
