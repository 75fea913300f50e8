"""Mailbox lookup: base64 credentials checked against the static mailbox map."""

import base64
import binascii
import enum
import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from hashsite.mail.models import MailLookupResponse, MailUser

log = logging.getLogger(__name__)

INVALID_BODY = "Invalid body"

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class LookupStage(str, enum.Enum):
    """How far a lookup got. RESPONDED means credentials matched."""

    RECEIVED = "received"
    STRUCTURE_VALIDATED = "structure_validated"
    DECODED = "decoded"
    FORMAT_VALIDATED = "format_validated"
    AUTHENTICATED = "authenticated"
    RESPONDED = "responded"


@dataclass(frozen=True)
class LookupResult:
    stage: LookupStage
    response: MailLookupResponse


def decode_field(value: str) -> str:
    """Base64 (standard alphabet) to UTF-8 text, trimmed. Raises ValueError on bad input."""
    try:
        raw = base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise ValueError(f"not base64: {e}") from e
    # UnicodeDecodeError is a ValueError
    return raw.decode("utf-8").strip()


def decode_credentials(username: str, password: str) -> Tuple[str, str]:
    """Decode both fields; the username is lowercased."""
    return decode_field(username).lower(), decode_field(password)


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_PATTERN.match(value))


def _reject(stage: LookupStage, error: Optional[str] = None) -> LookupResult:
    log.info("Mailbox lookup rejected after stage=%s", stage.value)
    return LookupResult(stage=stage, response=MailLookupResponse(success=False, error=error))


def lookup_mailbox(mailboxes: Mapping[str, MailUser], body: Any) -> LookupResult:
    """
    Run a lookup request body through validation, decoding and authentication.
    Every rejection is a structured {success: false}; nothing here raises for bad input.
    """
    stage = LookupStage.RECEIVED
    if not isinstance(body, dict):
        return _reject(stage, INVALID_BODY)
    username, password = body.get("username"), body.get("password")
    if not isinstance(username, str) or not isinstance(password, str):
        return _reject(stage, INVALID_BODY)

    stage = LookupStage.STRUCTURE_VALIDATED
    try:
        email, plain = decode_credentials(username, password)
    except ValueError:
        return _reject(stage)

    stage = LookupStage.DECODED
    if not email or not plain or not is_valid_email(email):
        return _reject(stage)

    stage = LookupStage.FORMAT_VALIDATED
    user = mailboxes.get(email)
    if user is None or user.password != plain:
        return _reject(stage)

    log.info("Mailbox lookup succeeded for email=%s", email)
    return LookupResult(
        stage=LookupStage.RESPONDED,
        response=MailLookupResponse(success=True, emails=list(user.emails)),
    )
