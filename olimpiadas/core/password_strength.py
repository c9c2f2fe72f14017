# olimpiadas/core/password_strength.py
import re
from dataclasses import dataclass

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
MIN_LENGTH = 8

STRENGTH_LABELS: dict[int, str] = {
    0: "Very weak",
    1: "Very weak",
    2: "Weak",
    3: "Medium",
    4: "Strong",
    5: "Very strong",
}

_SPECIAL_RE = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")


@dataclass(frozen=True)
class PasswordStrength:
    strength: int
    label: str


def score(password: str) -> PasswordStrength:
    """
    Count how many of the five criteria a password satisfies:
    lowercase, uppercase, digit, special character, length >= 8.
    """
    criteria = [
        re.search(r"[a-z]", password) is not None,
        re.search(r"[A-Z]", password) is not None,
        re.search(r"\d", password) is not None,
        _SPECIAL_RE.search(password) is not None,
        len(password) >= MIN_LENGTH,
    ]
    strength = sum(criteria)
    return PasswordStrength(strength=strength, label=STRENGTH_LABELS[strength])
