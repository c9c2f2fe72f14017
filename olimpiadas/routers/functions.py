# olimpiadas/routers/functions.py
"""
Endpoints called directly by the browser outside the versioned API
(formerly Supabase edge functions).

Contract:
  - POST with a JSON body, permissive CORS (any origin)
  - OPTIONS preflight answers "ok" with the CORS headers
  - 200 JSON on success, {"error": message} with 400 (bad request /
    business rule) or 500 (unexpected failure)
"""

import base64
import binascii
import logging
import smtplib

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from olimpiadas.core.auth import AuthClaims, get_token_claims
from olimpiadas.database import get_session
from olimpiadas.repositories.payment_repo import PaymentRepository
from olimpiadas.repositories.profile_repo import ProfileRepository
from olimpiadas.repositories.registration_repo import RegistrationRepository
from olimpiadas.repositories.user_repo import UserRepository
from olimpiadas.schemas.payment import PaymentProofNotification
from olimpiadas.schemas.registration import DependentProcessRequest
from olimpiadas.services.dependent_service import DependentService
from olimpiadas.services.notification_service import send_payment_proof
from olimpiadas.services.payment_service import PaymentService
from olimpiadas.services.role_service import RoleService

router = APIRouter(prefix="/functions/v1", tags=["Functions"])

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

user_repo = UserRepository()
profile_repo = ProfileRepository()
payment_repo = PaymentRepository()
role_service = RoleService(profile_repo, user_repo)
payment_service = PaymentService(payment_repo, user_repo, profile_repo)
dependent_service = DependentService(
    user_repo,
    profile_repo,
    RegistrationRepository(),
    payment_repo,
    role_service,
    payment_service,
)


def _json(body: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return _json({"error": message}, status_code)


def _decode_attachment(content: str) -> bytes:
    """Decode base64 content, accepting a data: URL prefix."""
    if content.startswith("data:") and "," in content:
        content = content.split(",", 1)[1]
    return base64.b64decode(content, validate=True)


@router.options("/process-event-registration")
@router.options("/send-payment-proof")
def preflight():
    """CORS preflight."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/process-event-registration")
async def process_event_registration(
    request: Request,
    session: Session = Depends(get_session),
    claims: AuthClaims = Depends(get_token_claims),
):
    """
    Register a dependent in an event.

    Body: {"dependent_id", "event_id", "birth_date"}. Only the guardian who
    registered the dependent may call it. The age-banded child profile
    (C-6 up to 6 years, C+7 otherwise) is picked from the stored birth date,
    which birth_date must match.
    """
    try:
        payload = DependentProcessRequest.model_validate(await request.json())
    except ValidationError as e:
        return _error(str(e))
    except ValueError:
        return _error("Invalid JSON body")

    try:
        registration = await run_in_threadpool(
            dependent_service.process_dependent_registration,
            session,
            claims.user_id,
            payload.dependent_id,
            payload.event_id,
            payload.birth_date,
        )
    except HTTPException as e:
        logger.warning("Dependent registration refused: %s", e.detail)
        return _error(str(e.detail), 400 if e.status_code < 500 else 500)
    except Exception as e:
        logger.exception("Dependent registration failed")
        return _error(str(e), 500)

    logger.info(
        "Dependent %s registered in event %s by %s",
        payload.dependent_id,
        payload.event_id,
        claims.user_id,
    )
    return _json(
        {
            "message": "Dependent registered successfully",
            "registration_id": registration.id,
            "selected_profile_id": registration.selected_profile_id,
        }
    )


@router.post("/send-payment-proof")
async def send_payment_proof_email(
    request: Request,
    claims: AuthClaims = Depends(get_token_claims),
):
    """
    Email a payment proof to the administrator.

    Body: {"userEmail", "userName", "branch", "roles", "modalities"?,
    "attachment": {"content" (base64), "filename", "type"}}.
    """
    try:
        payload = PaymentProofNotification.model_validate(await request.json())
        data = _decode_attachment(payload.attachment.content)
    except ValidationError as e:
        return _error(str(e))
    except binascii.Error:
        return _error("Attachment content is not valid base64")
    except ValueError:
        return _error("Invalid JSON body")

    logger.info("Processing email request for: %s <%s>", payload.user_name, payload.user_email)

    try:
        await run_in_threadpool(
            send_payment_proof,
            user_name=payload.user_name,
            user_email=payload.user_email,
            branch=payload.branch,
            roles=payload.roles,
            modalities=payload.modalities,
            attachment=(payload.attachment.filename, payload.attachment.type, data),
        )
    except (RuntimeError, smtplib.SMTPException) as e:
        logger.error("Email sending failed: %s", e)
        return _error(f"Failed to send email: {e}", 500)
    except Exception as e:
        logger.exception("Email sending failed")
        return _error(f"Failed to send email: {e}", 500)

    return _json({"message": "Email sent successfully"})
