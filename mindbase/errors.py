# mindbase/errors.py
# -*- coding: utf-8 -*-
"""Erreurs visibles par l'utilisateur (authentification / inscription)."""


class MindBaseError(Exception):
    """Base des erreurs MindBase."""


class AuthError(MindBaseError, ValueError):
    """Erreur d'authentification ou d'inscription, récupérable côté UI."""


class InvalidCredentials(AuthError):
    """Aucun couple (email, mot de passe) correspondant."""

    def __init__(self, message: str = "Invalid email or password.") -> None:
        super().__init__(message)


class EmailTaken(AuthError):
    """Email déjà utilisé par un autre compte."""

    def __init__(self, message: str = "Email already registered.") -> None:
        super().__init__(message)


class MissingFields(AuthError):
    """Champs obligatoires vides à l'inscription."""

    def __init__(self, message: str = "All fields are required.") -> None:
        super().__init__(message)
