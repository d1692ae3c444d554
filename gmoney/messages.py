import base64
import binascii
import json
import logging
import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from pathlib import Path

from gmoney.dates import clean_html
from gmoney.exceptions import MessageSourceError
from gmoney.models import RawMessage

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def extract_address(sender: str) -> str:
    """``"Uber Receipts <noreply@uber.com>"`` -> ``"noreply@uber.com"``."""
    m = _ADDRESS_RE.search(sender or "")
    return m.group(0) if m else ""


def parse_headers(headers: list[dict]) -> dict:
    return {h["name"]: h["value"] for h in headers}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _decode_body(body: dict) -> str:
    if data := body.get("data"):
        try:
            padded = data + "=" * (-len(data) % 4)
            return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError):
            logger.warning("[messages] body part is not valid base64, keeping it verbatim")
            return data
    return ""


def _extract_body(payload: dict) -> tuple[str, str]:
    text_body = ""
    html_body = ""

    if parts := payload.get("parts"):
        for part in parts:
            mime = part.get("mimeType", "")
            if mime == "text/plain":
                text_body = text_body or _decode_body(part.get("body", {}))
            elif mime == "text/html":
                html_body = html_body or _decode_body(part.get("body", {}))
            elif mime.startswith("multipart/"):
                t, h = _extract_body(part)
                text_body = text_body or t
                html_body = html_body or h
    else:
        mime = payload.get("mimeType", "")
        decoded = _decode_body(payload.get("body", {}))
        if mime == "text/html":
            html_body = decoded
        else:
            text_body = decoded

    return text_body, html_body


def _received_at(headers: dict, internal_date: str | None) -> datetime:
    if date_str := headers.get("Date"):
        try:
            return _as_utc(parsedate_to_datetime(date_str))
        except (TypeError, ValueError):
            logger.debug("[messages] unparseable Date header %r", date_str)
    if internal_date:
        try:
            return datetime.fromtimestamp(int(internal_date) / 1000, UTC)
        except (TypeError, ValueError):
            logger.debug("[messages] unparseable internalDate %r", internal_date)
    return datetime.now(UTC)


def parse_gmail_message(raw_message: dict) -> RawMessage:
    """Convert a Gmail API ``users.messages.get`` resource into a RawMessage.

    The plain-text part is preferred; HTML-only mail is reduced to its text.
    """
    payload = raw_message.get("payload", {})
    headers = parse_headers(payload.get("headers", []))
    text_body, html_body = _extract_body(payload)
    return RawMessage(
        id=raw_message["id"],
        sender=headers.get("From", ""),
        subject=headers.get("Subject", ""),
        body=text_body or clean_html(html_body),
        received_at=_received_at(headers, raw_message.get("internalDate")),
    )


def parse_record(record: dict) -> RawMessage:
    received = record.get("receivedAt") or record.get("received_at")
    if isinstance(received, str):
        received_at = _as_utc(datetime.fromisoformat(received.replace("Z", "+00:00")))
    else:
        received_at = datetime.now(UTC)
    return RawMessage(
        id=str(record["id"]),
        sender=record.get("from") or "",
        subject=record.get("subject") or "",
        body=record.get("body") or "",
        received_at=received_at,
    )


def load_messages(path: str | Path) -> list[RawMessage]:
    """Read a JSON array of Gmail API resources and/or flat message records.

    Messages repeated under the same id are kept once, first occurrence wins.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise MessageSourceError(f"Failed to read messages from {path}: {e}") from e
    if not isinstance(data, list):
        raise MessageSourceError(f"{path} must contain a JSON array of messages")

    messages: list[RawMessage] = []
    seen: set[str] = set()
    for item in data:
        if not isinstance(item, dict):
            raise MessageSourceError(f"Malformed message in {path}: expected an object, got {type(item).__name__}")
        try:
            message = parse_gmail_message(item) if "payload" in item else parse_record(item)
        except (KeyError, TypeError, ValueError) as e:
            raise MessageSourceError(f"Malformed message in {path}: {e}") from e
        if message.id in seen:
            continue
        seen.add(message.id)
        messages.append(message)

    logger.info("[messages] loaded %d messages from %s", len(messages), path)
    return messages
