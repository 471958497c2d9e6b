# /seatwise/services/seating_helpers/profile_summarizer.py

import re
from typing import Optional

from ...models.seating_model import StudentProfile, ProfileSummary

FOCUS_RANK = {"high": 3, "medium": 2, "low": 1}
DEFAULT_DISPLAY_NAME = "Student"


def focus_rank(focus_level: Optional[str]) -> int:
    """high -> 3, medium -> 2, low -> 1; anything else (including None) -> 0."""
    if not focus_level:
        return 0
    return FOCUS_RANK.get(focus_level.strip().lower(), 0)

def _name_from_email(email: str) -> str:
    local_part = email.split("@")[0]
    tokens = [t for t in re.split(r"[._]", local_part) if t]
    return " ".join(t[0].upper() + t[1:] for t in tokens)

def resolve_display_name(profile: StudentProfile) -> str:
    """
    Resolves the human-readable label for a student. Never returns an empty
    string. Order: explicit displayName, first + last name, first name alone,
    the title-cased local part of the email, then "Student".
    """
    if profile.displayName and profile.displayName.strip():
        return profile.displayName.strip()

    first = (profile.firstName or "").strip()
    last = (profile.lastName or "").strip()
    if first and last:
        return f"{first} {last}"
    if first:
        return first

    if profile.email:
        from_email = _name_from_email(profile.email.strip())
        if from_email:
            return from_email

    return DEFAULT_DISPLAY_NAME

def summarize(profile: StudentProfile) -> ProfileSummary:
    return ProfileSummary(
        studentId=profile.studentId,
        focusRank=focus_rank(profile.focusLevel),
        displayName=resolve_display_name(profile)
    )
