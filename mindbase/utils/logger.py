# mindbase/utils/logger.py
# -*- coding: utf-8 -*-
import logging
import os
import sys
from typing import Optional


def configure_logging(app_name: str = "mindbase", log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure le logging de l'application.

    Args:
        app_name: nom du logger racine du projet
        log_level: DEBUG, INFO, WARNING, ERROR, CRITICAL
                   Si None, lit LOG_LEVEL (défaut INFO)

    Returns:
        Le logger configuré
    """
    if log_level is None:
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

    logger = logging.getLogger(app_name)
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    # un seul handler, même si Streamlit ré-exécute le script
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)

    return logger
