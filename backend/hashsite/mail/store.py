"""Load the static mailbox file once at startup."""

import json
import logging
from pathlib import Path
from typing import Dict

from pydantic import ValidationError

from hashsite.mail.models import MailUser

log = logging.getLogger(__name__)


def load_mailboxes(path: Path) -> Dict[str, MailUser]:
    """
    Read {"<email>": {"password": ..., "emails": [...]}} from path.
    Keys are lowercased. Missing or malformed file yields an empty map.
    """
    if not path.is_file():
        log.warning("Mail file not found: %s; mailbox lookup will reject every login", path)
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.error("Error parsing %s: %s", path, e)
        return {}
    if not isinstance(raw, dict):
        log.error("Error parsing %s: expected an object keyed by email", path)
        return {}
    mailboxes: Dict[str, MailUser] = {}
    for key, entry in raw.items():
        email = str(key).strip().lower()
        try:
            mailboxes[email] = MailUser.model_validate({**entry, "email": email})
        except (TypeError, ValidationError) as e:
            log.error("Skipping mailbox %s in %s: %s", email, path, e)
    log.info("Loaded %d mailboxes from %s", len(mailboxes), path)
    return mailboxes
