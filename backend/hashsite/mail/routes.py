"""Mailbox API route."""

import logging
from typing import Annotated, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from hashsite.dependencies import get_mailboxes
from hashsite.mail.models import MailLookupResponse, MailUser
from hashsite.mail.service import lookup_mailbox

router = APIRouter(prefix="/api", tags=["mail"])
log = logging.getLogger(__name__)


@router.post("/getEmails")
async def get_emails(
    request: Request,
    mailboxes: Annotated[Dict[str, MailUser], Depends(get_mailboxes)],
) -> JSONResponse:
    """
    Body: {"username": <base64>, "password": <base64>}.
    Always 200 with {success: ...}, except 400 when the request cannot be processed at all.
    """
    try:
        body = await request.json()
        result = lookup_mailbox(mailboxes, body)
    except Exception as e:
        log.warning("getEmails failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=MailLookupResponse(success=False).as_body(),
        )
    return JSONResponse(content=result.response.as_body())
