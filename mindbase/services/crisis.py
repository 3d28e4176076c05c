# mindbase/services/crisis.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CrisisContact:
    title: str
    description: str
    number: str

    @property
    def tel_link(self) -> str:
        return f"tel:{self.number}"


EMERGENCY = CrisisContact(
    title="Emergency Help",
    description="If you are in immediate danger or need urgent medical attention, please do not wait.",
    number="112",
)

HELPLINES: Tuple[CrisisContact, ...] = (
    CrisisContact(
        title="Mental Health Helpline",
        description="24/7 confidential support for people in distress.",
        number="14416",
    ),
    CrisisContact(
        title="Suicide Prevention",
        description="Free and confidential support for people in distress.",
        number="9152987821",
    ),
)

REASSURANCE = "Remember: Reaching out for help is a sign of strength, not weakness. You are not alone."
