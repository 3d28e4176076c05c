# mindbase/services/screening.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from mindbase.persistence.entities import MentalHealthResult, new_id, now_iso

# Questionnaire simplifié de type GAD-7
QUESTIONS: Tuple[str, ...] = (
    "Feeling nervous, anxious, or on edge",
    "Not being able to stop or control worrying",
    "Worrying too much about different things",
    "Trouble relaxing",
    "Being so restless that it is hard to sit still",
    "Becoming easily annoyed or irritable",
    "Feeling afraid as if something awful might happen",
)

OPTIONS: Tuple[Tuple[str, int], ...] = (
    ("Not at all", 0),
    ("Several days", 1),
    ("More than half the days", 2),
    ("Nearly every day", 3),
)

MIN_ANSWER = 0
MAX_ANSWER = 3
MAX_SCORE = MAX_ANSWER * len(QUESTIONS)

# Au-delà : message invitant à consulter un professionnel
FOLLOW_UP_THRESHOLD = 9

FOLLOW_UP_MESSAGE = (
    "Your score suggests you may be experiencing anxiety symptoms. Consider discussing this result "
    "with a healthcare professional. Use the Chatbot or SOS page for immediate support."
)


@dataclass(frozen=True)
class ScreeningResult:
    """Résultat du questionnaire."""
    score: int
    interpretation: str


class ScreeningValidationError(ValueError):
    """Réponses incomplètes ou hors bornes."""


def validate_answers(answers: Sequence[int]) -> None:
    """Valide nombre et bornes des réponses. Lève ScreeningValidationError si invalide."""
    errors: List[str] = []
    if len(answers) != len(QUESTIONS):
        errors.append(f"{len(answers)} réponses (attendu {len(QUESTIONS)})")
    for i, a in enumerate(answers):
        if not isinstance(a, int) or isinstance(a, bool) or not (MIN_ANSWER <= a <= MAX_ANSWER):
            errors.append(f"question {i + 1} hors bornes: {a!r} (attendu {MIN_ANSWER}..{MAX_ANSWER})")

    if errors:
        raise ScreeningValidationError("; ".join(errors))


def interpret_score(score: int) -> str:
    if score <= 4:
        return "Minimal anxiety"
    if score <= 9:
        return "Mild anxiety"
    if score <= 14:
        return "Moderate anxiety"
    return "Severe anxiety"


def needs_follow_up(score: int) -> bool:
    return score > FOLLOW_UP_THRESHOLD


def compute_screening(answers: Sequence[int]) -> ScreeningResult:
    """
    Calcule le score total (0..21) et son interprétation.

    Barème : 0-4 minimal, 5-9 léger, 10-14 modéré, 15+ sévère.
    """
    validate_answers(answers)
    total = sum(answers)
    return ScreeningResult(score=total, interpretation=interpret_score(total))


def build_result(user_id: str, answers: Sequence[int]) -> MentalHealthResult:
    res = compute_screening(answers)
    return MentalHealthResult(
        id=new_id(),
        user_id=user_id,
        date=now_iso(),
        score=res.score,
        interpretation=res.interpretation,
    )
