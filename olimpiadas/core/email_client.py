# olimpiadas/core/email_client.py
"""
Outgoing mail for the Olimpíadas backend.

SMTP settings come from Settings (SMTP_* variables in .env):

    SMTP_HOST=smtp.gmail.com
    SMTP_PORT=465
    SMTP_USERNAME=inscricoes@olimpiadas.com.br
    SMTP_PASSWORD=<app password>
    SMTP_FROM_EMAIL=inscricoes@olimpiadas.com.br
    SMTP_USE_TLS=false
    SMTP_USE_SSL=true

Services call send_email(...); build_message(...) is split out so the MIME
layout can be checked without a server.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from olimpiadas.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# (filename, content_type, raw bytes)
Attachment = tuple[str, str, bytes]


def _sender(settings: Settings) -> str:
    address = settings.SMTP_FROM_EMAIL or settings.SMTP_USERNAME or ""
    if address and settings.SMTP_FROM_NAME:
        return f"{settings.SMTP_FROM_NAME} <{address}>"
    return address


def _connect(settings: Settings) -> smtplib.SMTP:
    """
    Open an SMTP connection.

      - SMTP_USE_SSL: implicit TLS via SMTP_SSL (usually port 465)
      - otherwise plain SMTP, upgraded with STARTTLS when SMTP_USE_TLS
    """
    if not (settings.SMTP_HOST and settings.SMTP_USERNAME and settings.SMTP_PASSWORD):
        raise RuntimeError(
            "SMTP is not configured. Set SMTP_HOST, SMTP_USERNAME and "
            "SMTP_PASSWORD in .env."
        )

    if settings.SMTP_USE_SSL:
        return smtplib.SMTP_SSL(
            settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT
        )

    server = smtplib.SMTP(
        settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT
    )
    if settings.SMTP_USE_TLS:
        server.starttls()
    return server


def build_message(
    to_email: str,
    subject: str,
    text_body: str,
    html_body: str | None = None,
    attachments: list[Attachment] | None = None,
) -> EmailMessage:
    """
    Assemble the MIME message.

    Content types without a slash are attached as application/octet-stream.
    """
    msg = EmailMessage()
    msg["From"] = _sender(get_settings())
    msg["To"] = to_email
    msg["Subject"] = subject

    msg.set_content(text_body)
    if html_body:
        msg.add_alternative(html_body, subtype="html")

    for filename, content_type, data in attachments or []:
        maintype, _, subtype = content_type.partition("/")
        if not subtype:
            maintype, subtype = "application", "octet-stream"
        msg.add_attachment(data, maintype=maintype, subtype=subtype, filename=filename)

    return msg


def send_email(
    to_email: str,
    subject: str,
    text_body: str,
    html_body: str | None = None,
    attachments: list[Attachment] | None = None,
) -> None:
    """
    Send one message to a single recipient.

    Raises:
        RuntimeError: SMTP settings are missing.
        smtplib.SMTPException: connection, login or delivery failed.
    """
    settings = get_settings()
    msg = build_message(to_email, subject, text_body, html_body, attachments)

    server = _connect(settings)
    try:
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.send_message(msg)
    finally:
        try:
            server.quit()
        except smtplib.SMTPException:
            logger.debug("SMTP quit failed", exc_info=True)

    logger.info("Email sent to %s: %s", to_email, subject)
