"""
Gemini generateContent client for the AI Logo Placer app.

Builds the multimodal request, sends it and pulls the generated image out of
the response. The response layout (candidates[0].content.parts[*].inlineData)
is the API's contract and is only read here.
"""

import logging

import requests

from config import (
    DEFAULT_RESULT_MIME,
    GEMINI_API_KEY,
    REQUEST_TIMEOUT,
    RESPONSE_MODALITIES,
    generate_content_url,
)

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = (
    "No image data was returned from the API. "
    "The model may not have been able to fulfill the request."
)


class LogoPlacerError(Exception):
    """Base class for errors shown to the user."""

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class ValidationError(LogoPlacerError):
    """Missing image or empty prompt."""


class EncodingError(LogoPlacerError):
    """An uploaded file could not be read as base64."""


class TransportError(LogoPlacerError):
    """The API answered with a non-success status."""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)


class ExtractionError(LogoPlacerError):
    """The response did not contain an image."""


def build_payload(prompt, product, logo):
    """
    Build the generateContent request body.

    Args:
        prompt: instruction text
        product: (mime_type, base64_data) of the product photo
        logo: (mime_type, base64_data) of the logo

    Returns:
        dict ready to be sent as JSON
    """
    parts = [{"text": prompt}]
    for mime_type, data in (product, logo):
        parts.append({"inlineData": {"mimeType": mime_type, "data": data}})

    return {
        "contents": [{"parts": parts}],
        "generationConfig": {"responseModalities": list(RESPONSE_MODALITIES)},
    }


def _api_error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None

    message = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")

    return message or response.reason or f"HTTP {response.status_code}"


def post_generate_content(payload, api_key=None, url=None, session=None, timeout=None):
    """Send one generateContent request and return the parsed JSON response."""
    http = session or requests
    url = url or generate_content_url()
    api_key = GEMINI_API_KEY if api_key is None else api_key

    parts = payload["contents"][0]["parts"]
    logger.info("Sending generateContent request to %s (%d parts)", url, len(parts))

    response = http.post(
        url,
        params={"key": api_key},
        headers={"Content-Type": "application/json"},
        json=payload,
        timeout=timeout or REQUEST_TIMEOUT,
    )

    if not 200 <= response.status_code < 300:
        message = _api_error_message(response)
        logger.error("API returned %s: %s", response.status_code, message)
        raise TransportError(f"API Error: {message}", status_code=response.status_code)

    return response.json()


def extract_image_data(result):
    """
    Return the first inline image in the response as a data URL.

    Raises ExtractionError when there is none.
    """
    try:
        parts = result["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        parts = []

    for part in parts or []:
        inline = part.get("inlineData") if isinstance(part, dict) else None
        if isinstance(inline, dict) and inline.get("data"):
            mime = inline.get("mimeType") or DEFAULT_RESULT_MIME
            return f"data:{mime};base64,{inline['data']}"

    logger.warning("Response held %d part(s) but no inline image", len(parts or []))
    raise ExtractionError(NO_IMAGE_MESSAGE)
