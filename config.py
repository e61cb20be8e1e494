"""
Configuration file for the AI Logo Placer app.
Contains API settings, upload rules and the default instruction prompt.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Gemini API settings (key may stay empty where the hosting platform injects it)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image-preview")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "300"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Output modalities requested from the model
RESPONSE_MODALITIES = ["TEXT", "IMAGE"]

# Used when the API does not say what kind of image it returned
DEFAULT_RESULT_MIME = "image/png"

DEFAULT_PROMPT = (
    "Place the provided logo into the scene with the product. Crucially, place the logo in a free, "
    "empty space next to the product on the background, not on the product itself. Analyze the image "
    "to find the best location. Consider the composition, lighting, and textures of the background to "
    "make the logo look naturally integrated. The logo must be clearly visible and should not cover any "
    "part of the main product."
)

# Uploader filter, advisory only
ACCEPTED_IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "bmp", "tiff", "webp", "heic", "heif"]

# Previews are shrunk to fit inside this box
PREVIEW_MAX_SIZE = (512, 512)

# Download formats for the generated image
EXPORT_FORMATS = {
    "original": {"label": "As returned by the API", "mime": None, "ext": None},
    "png": {"label": "PNG", "mime": "image/png", "ext": "png"},
    "jpg": {"label": "JPEG", "mime": "image/jpeg", "ext": "jpg"},
}


def generate_content_url(model=None, base=None):
    """Full generateContent endpoint for the configured image model."""
    base = (base or GEMINI_API_BASE).rstrip("/")
    return f"{base}/models/{model or GEMINI_IMAGE_MODEL}:generateContent"
