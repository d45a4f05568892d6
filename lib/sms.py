# =============================================================================
# lib/sms.py - Solapi SMS/LMS Gateway Client
# =============================================================================
# Minimal client for the Solapi v4 messaging REST API, used for partner
# outreach messages to vendors.
#
# Solapi authenticates each request with an HMAC header:
#   Authorization: HMAC-SHA256 apiKey=<key>, date=<iso8601>, salt=<hex>, signature=<hex>
# where signature = HMAC_SHA256(api_secret, date + salt).
#
# Message type (SMS vs LMS) is picked by the gateway from the text length.
# =============================================================================

import hashlib
import hmac
import logging
import secrets
from typing import Any

import httpx

from app.config import settings
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

SEND_PATH = "/messages/v4/send"


class SmsGatewayError(Exception):
    """Raised when Solapi rejects a message or can't be reached."""

    def __init__(self, message: str, status_code: int | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


def build_auth_header(api_key: str, api_secret: str, date: str | None = None, salt: str | None = None) -> str:
    """
    Build the Solapi HMAC-SHA256 Authorization header.

    date and salt are generated when omitted; passing them makes the
    signature reproducible.
    """
    date = date or utc_now_iso()
    salt = salt or secrets.token_hex(16)
    signature = hmac.new(
        api_secret.encode("utf-8"),
        (date + salt).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"HMAC-SHA256 apiKey={api_key}, date={date}, salt={salt}, signature={signature}"


def clean_phone_number(number: str) -> str:
    """Strip hyphens and spaces ("010-1234-5678" -> "01012345678")."""
    return number.replace("-", "").replace(" ", "")


def send_message(to_number: str, text: str, from_number: str | None = None) -> dict[str, Any]:
    """
    Send one text message through Solapi.

    Args:
        to_number: Recipient number (hyphens allowed)
        text: Message body
        from_number: Registered sender (default: settings.SMS_FROM_NUMBER)

    Returns:
        Solapi response JSON

    Raises:
        SmsGatewayError: On transport failure or non-2xx response
    """
    payload = {
        "message": {
            "to": clean_phone_number(to_number),
            "from": clean_phone_number(from_number or settings.SMS_FROM_NUMBER),
            "text": text,
        }
    }
    headers = {
        "Authorization": build_auth_header(settings.SOLAPI_API_KEY, settings.SOLAPI_API_SECRET),
        "Content-Type": "application/json",
    }
    url = settings.SOLAPI_BASE_URL.rstrip("/") + SEND_PATH

    try:
        response = httpx.post(url, json=payload, headers=headers, timeout=10)
    except httpx.HTTPError as e:
        logger.error(f"Solapi request failed: {e}")
        raise SmsGatewayError(f"Could not reach Solapi: {e}")

    if response.status_code >= 400:
        try:
            body = response.json()
        except ValueError:
            body = {}
        error_code = body.get("errorCode")
        message = body.get("errorMessage") or response.text
        logger.error(f"Solapi rejected message ({response.status_code}, {error_code}): {message}")
        raise SmsGatewayError(message, status_code=response.status_code, error_code=error_code)

    result = response.json()
    logger.info(f"Solapi accepted message to {payload['message']['to']}: {result.get('messageId')}")
    return result
