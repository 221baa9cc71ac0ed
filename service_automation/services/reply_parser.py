"""
Reply parsing — pull the customer's email, serial number, warranty answer
and problem description out of a pasted email.

Strategy per field:
  1. Prefer an explicit label ("From:", "Serial number:", "Problem:").
  2. Fall back to a looser scan of the body.
  3. Fall back to a fixed placeholder so the reply can still be processed.
"""
import re

from ..models import (
    IN_WARRANTY, OUT_OF_WARRANTY, WARRANTY_UNKNOWN,
    SERIAL_NOT_PROVIDED, PROBLEM_FALLBACK, ReplyDetails,
)
from .entity_service import extract_email
from .sanitize import normalize_pasted_text

HEADER_LABELS = ('from', 'to', 'cc', 'bcc', 'subject', 'date', 'sent', 'reply-to')
REPLY_LABELS = ('serial', 'warranty', 'problem', 'issue', 'description', 'photo', 'photos')

_RE_FROM_LINE = re.compile(r'^\s*from\s*:(.*)$', re.IGNORECASE | re.MULTILINE)
_RE_HEADER_LINE = re.compile(
    rf"^\s*(?:{'|'.join(re.escape(h) for h in HEADER_LABELS)})\s*:", re.IGNORECASE
)
_RE_SERIAL = re.compile(r'serial(?:\s*number)?[\s:]+([A-Za-z0-9-]+)', re.IGNORECASE)
_RE_WARRANTY_YES = re.compile(r'warranty.*?\byes\b', re.IGNORECASE)
_RE_WARRANTY_NO = re.compile(r'warranty.*?\bno\b', re.IGNORECASE)

_NEXT_LABEL = '|'.join(HEADER_LABELS + REPLY_LABELS)
_RE_PROBLEM = re.compile(
    r'^[ \t]*(?:problem|issue|description)[^:\n]{0,40}:[ \t]*'
    r'(.+?)'
    rf'(?=\n[ \t]*\n|\n[ \t]*(?:{_NEXT_LABEL})\b[ \t]*(?:number)?[ \t]*:|\Z)',
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
_RE_WHITESPACE = re.compile(r'\s+')

FALLBACK_LINE_COUNT = 3


def extract_sender_email(text):
    """Address on the From: line, else the first email anywhere, else ''."""
    from_match = _RE_FROM_LINE.search(text)
    if from_match:
        sender = extract_email(from_match.group(1))
        if sender:
            return sender
    return extract_email(text)


def extract_serial_number(text):
    match = _RE_SERIAL.search(text)
    return match.group(1) if match else SERIAL_NOT_PROVIDED


def detect_warranty_status(text):
    """'yes' is checked before 'no', so a reply containing both is In Warranty."""
    if _RE_WARRANTY_YES.search(text):
        return IN_WARRANTY
    if _RE_WARRANTY_NO.search(text):
        return OUT_OF_WARRANTY
    return WARRANTY_UNKNOWN


def extract_problem_description(text):
    match = _RE_PROBLEM.search(text)
    if match:
        described = _RE_WHITESPACE.sub(' ', match.group(1)).strip()
        if described:
            return described

    body_lines = [
        line.strip() for line in text.split('\n')
        if line.strip() and not _RE_HEADER_LINE.match(line)
    ]
    fallback = ' '.join(body_lines[:FALLBACK_LINE_COUNT]).strip()
    return fallback or PROBLEM_FALLBACK


def parse_reply(email_text):
    """Parse a pasted customer reply into ReplyDetails."""
    text = normalize_pasted_text(email_text)
    return ReplyDetails(
        customer_email=extract_sender_email(text),
        serial_number=extract_serial_number(text),
        warranty_status=detect_warranty_status(text),
        problem_description=extract_problem_description(text),
    )
