"""Append-only audit trail for login decisions.

One JSON object per line in `logs/audit.log` (or ``$AUDIT_LOG_DIR/audit.log``).
Emails are stored masked so the trail never holds a full identity list.
"""
import json
import os
import threading
from datetime import datetime, timezone
from pathlib import Path

_LOCK = threading.Lock()

ROOT = Path(__file__).resolve().parent.parent.parent
LOG_DIR = Path(os.environ.get("AUDIT_LOG_DIR") or ROOT / "logs")
LOG_FILE = LOG_DIR / "audit.log"


def mask_email(email: str | None) -> str | None:
    """'alice@example.com' -> 'al***@example.com'."""
    if not email:
        return None
    local, sep, domain = email.partition("@")
    if not sep:
        return "*" * len(email)
    visible = local[:2] if len(local) > 2 else local[:1]
    return f"{visible}{'*' * max(1, len(local) - len(visible))}@{domain}"


def log_event(action: str, user_id: str | None, email: str | None = None, payload: dict | None = None) -> None:
    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "user_id": user_id,
        "email": mask_email(email),
        "payload": payload or {},
    }
    line = json.dumps(entry, ensure_ascii=False) + "\n"
    with _LOCK:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(line)
