"""Mailbox schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MailUser(BaseModel):
    """A mailbox from the static mail file. email is the lowercase lookup key."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    # Opaque records, returned to the client as stored
    emails: List[Any] = Field(default_factory=list)


class MailLookupResponse(BaseModel):
    """Body of /api/getEmails. Unset fields are omitted on the wire."""

    success: bool
    error: Optional[str] = None
    emails: Optional[List[Any]] = None

    def as_body(self) -> Dict[str, Any]:
        """JSON body with unset optional fields left out."""
        body: Dict[str, Any] = {"success": self.success}
        if self.error is not None:
            body["error"] = self.error
        if self.emails is not None:
            body["emails"] = self.emails
        return body
