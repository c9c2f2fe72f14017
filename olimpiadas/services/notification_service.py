# olimpiadas/services/notification_service.py
import logging

from olimpiadas.core.config import get_settings
from olimpiadas.core.email_client import Attachment, send_email

settings = get_settings()
logger = logging.getLogger(__name__)

PAYMENT_PROOF_SUBJECT = "Novo Comprovante de Pagamento - Olimpíadas"


def _join(value: str | list[str] | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return ", ".join(value)


def build_payment_proof_body(
    user_name: str,
    user_email: str,
    branch: str | None,
    roles: str | list[str],
    modalities: str | list[str] | None = None,
) -> str:
    """Plain-text summary sent to the administrator with the receipt attached."""
    lines = [
        "Novo cadastro realizado:",
        "",
        f"Nome: {user_name}",
        f"Email: {user_email}",
        f"Filial: {branch or 'Sem filial'}",
        f"Perfis: {_join(roles)}",
    ]
    if modalities:
        lines.append(f"Modalidades: {_join(modalities)}")
    lines += ["", "O comprovante de pagamento está anexado a este email."]
    return "\n".join(lines)


def send_payment_proof(
    user_name: str,
    user_email: str,
    branch: str | None,
    roles: str | list[str],
    attachment: Attachment,
    modalities: str | list[str] | None = None,
) -> None:
    """
    Email a submitted payment proof to the administrator.

    Raises whatever send_email raises (RuntimeError for missing SMTP config,
    smtplib.SMTPException for delivery failures).
    """
    logger.info("Sending payment proof of %s <%s>", user_name, user_email)
    send_email(
        to_email=settings.ADMIN_NOTIFICATION_EMAIL,
        subject=PAYMENT_PROOF_SUBJECT,
        text_body=build_payment_proof_body(
            user_name, user_email, branch, roles, modalities
        ),
        attachments=[attachment],
    )
