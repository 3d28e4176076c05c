# mindbase/services/mindfulness.py
# -*- coding: utf-8 -*-
"""Exercices de pleine conscience et minuteur associé."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Exercise:
    id: str
    title: str
    description: str
    duration_seconds: int
    steps: Tuple[str, ...]


EXERCISES: Tuple[Exercise, ...] = (
    Exercise(
        id="box-breathing",
        title="Box Breathing",
        description="A simple technique to slow down your breathing and reduce stress. "
                    "Inhale, hold, exhale, hold for 4 seconds each.",
        duration_seconds=60,
        steps=("Inhale (4s)", "Hold (4s)", "Exhale (4s)", "Hold (4s)"),
    ),
    Exercise(
        id="5-4-3-2-1",
        title="5-4-3-2-1 Grounding",
        description="Acknowledge 5 things you see, 4 you feel, 3 you hear, 2 you smell, and 1 you taste.",
        duration_seconds=120,
        steps=("Look around (5)", "Touch things (4)", "Listen (3)", "Smell (2)", "Taste (1)"),
    ),
    Exercise(
        id="body-scan",
        title="Quick Body Scan",
        description="Focus attention on different parts of your body, from toes to head, releasing tension.",
        duration_seconds=180,
        steps=("Focus on toes", "Legs & Knees", "Hips & Stomach", "Chest & Arms", "Neck & Head"),
    ),
)


def get_exercise(exercise_id: str) -> Optional[Exercise]:
    return next((ex for ex in EXERCISES if ex.id == exercise_id), None)


def format_time(seconds: int) -> str:
    """125 -> '2:05'"""
    m, s = divmod(max(0, int(seconds)), 60)
    return f"{m}:{s:02d}"


def format_duration(seconds: int) -> str:
    """Durée lisible pour la carte d'un exercice : '1 min', '2 min 30 sec'."""
    m, s = divmod(seconds, 60)
    return f"{m} min {s} sec" if s else f"{m} min"


def current_step(exercise: Exercise, time_left: int) -> str:
    """Étape en cours, estimée à partir du temps écoulé (étapes de durée égale)."""
    total = exercise.duration_seconds
    elapsed = total - time_left
    step_duration = total / len(exercise.steps)
    index = min(int(elapsed // step_duration), len(exercise.steps) - 1)
    return exercise.steps[max(0, index)]


class BreathingTimer:
    """Compte à rebours d'un exercice, avancé d'une seconde par `tick()`."""

    def __init__(self, exercise: Exercise) -> None:
        self.exercise = exercise
        self.time_left = exercise.duration_seconds
        self.is_active = False
        self.completed = False

    def start(self) -> None:
        self.time_left = self.exercise.duration_seconds
        self.is_active = True
        self.completed = False

    def toggle(self) -> None:
        if not self.completed:
            self.is_active = not self.is_active

    def reset(self) -> None:
        self.time_left = self.exercise.duration_seconds
        self.is_active = False
        self.completed = False

    def tick(self, seconds: int = 1) -> None:
        if not self.is_active:
            return
        self.time_left = max(0, self.time_left - seconds)
        if self.time_left == 0:
            self.is_active = False
            self.completed = True

    @property
    def step(self) -> str:
        return current_step(self.exercise, self.time_left)

    @property
    def display(self) -> str:
        return format_time(self.time_left)
