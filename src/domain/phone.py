"""Phone number helpers (Indian numbers by default)"""

import re

DEFAULT_COUNTRY_CODE = "91"


def _digits(phone: str) -> str:
    return re.sub(r"\D", "", phone or "")


def format_e164(phone: str) -> str:
    digits = _digits(phone)
    if digits.startswith(DEFAULT_COUNTRY_CODE) and len(digits) == 12:
        return f"+{digits}"
    if len(digits) == 10:
        return f"+{DEFAULT_COUNTRY_CODE}{digits}"
    return f"+{digits}"


def to_whatsapp_chat_id(phone: str) -> str:
    """Green API chat id, e.g. 919876543210@c.us"""
    digits = _digits(phone)
    if len(digits) == 10:
        digits = f"{DEFAULT_COUNTRY_CODE}{digits}"
    return f"{digits}@c.us"
