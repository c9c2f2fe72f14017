# olimpiadas/routers/auth.py
from fastapi import APIRouter

from olimpiadas.core.password_strength import score
from olimpiadas.schemas.auth import PasswordStrengthRead, PasswordStrengthRequest

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/password-strength", response_model=PasswordStrengthRead)
def password_strength(payload: PasswordStrengthRequest):
    """
    Score a candidate password for the sign-up form (public).

    Sign-up itself happens against Supabase Auth; the password is never
    stored here.
    """
    result = score(payload.password)
    return PasswordStrengthRead(strength=result.strength, label=result.label)
