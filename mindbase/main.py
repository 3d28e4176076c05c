# mindbase/main.py
# -*- coding: utf-8 -*-
# --- bootstrap import path (run as script via streamlit) ---
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
# -----------------------------------------------------------
import datetime as dt
import streamlit as st

from mindbase.app_context import get_context
from mindbase.errors import AuthError
from mindbase.persistence.entities import ChatMessage
from mindbase.services.chat_service import ChatService

ctx = get_context()

st.set_page_config(page_title="MindBase", page_icon="🧠", layout="centered")

# ---------------------------------------------------------------------
# Authentification
# ---------------------------------------------------------------------
user = ctx.session.current_user()

if user is None:
    st.title("🧠 MindBase")
    mode = st.radio("Mode", options=["Login", "Register"], horizontal=True, label_visibility="collapsed")
    st.caption("Welcome back, friend." if mode == "Login" else "Begin your wellness journey.")

    with st.form("auth_form"):
        name = st.text_input("Name") if mode == "Register" else ""
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In" if mode == "Login" else "Create Account")

    if submitted:
        try:
            if mode == "Login":
                ctx.session.login(email, password)
                st.rerun()
            else:
                ctx.session.register(name=name, email=email, password=password)
                st.success("Registration successful! Please log in.")
        except AuthError as e:
            st.error(str(e))
    st.stop()

# ---------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------
st.sidebar.title(f"👤 {user.name}")
st.sidebar.caption(user.email)
if st.sidebar.button("Logout"):
    ctx.session.logout()
    st.rerun()

# ---------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------
st.title("💬 MindBase Companion")

messages = ctx.chats.list(user.id)
for m in messages:
    with st.chat_message("assistant" if m.role == "model" else "user"):
        st.write(m.text)
        st.caption(dt.datetime.fromtimestamp(m.timestamp / 1000).strftime("%H:%M"))

prompt = st.chat_input("Share what's on your mind...")
if prompt and prompt.strip():
    user_msg = ChatMessage.create("user", prompt)
    ctx.chats.save(user.id, user_msg)
    with st.chat_message("user"):
        st.write(prompt)

    with st.spinner("Thinking..."):
        # historique sans le nouveau message
        text = ChatService().reply(history=messages, message=prompt, user_name=user.name, user_bio=user.bio)

    bot_msg = ChatMessage.create("model", text)
    ctx.chats.save(user.id, bot_msg)
    st.rerun()
