from PIL import Image, ImageOps, UnidentifiedImageError
from pillow_heif import register_heif_opener
import base64
import binascii
import io
import logging
import mimetypes
import os
from config import PREVIEW_MAX_SIZE, EXPORT_FORMATS, DEFAULT_RESULT_MIME
from generation import EncodingError

logger = logging.getLogger(__name__)

# HEIC/HEIF uploads from phones
register_heif_opener()


def _rewind(file_obj):
    try:
        file_obj.seek(0)
    except (AttributeError, OSError):
        pass


def read_upload(file_obj):
    # Streamlit uploads are BytesIO subclasses, getvalue() ignores the read position
    if hasattr(file_obj, "getvalue"):
        return file_obj.getvalue()
    _rewind(file_obj)
    data = file_obj.read()
    _rewind(file_obj)
    return data


def guess_mime_type(file_obj):
    """MIME type reported by the uploader, else guessed from the file name."""
    mime = getattr(file_obj, "type", None)
    if mime:
        return mime
    guessed, _ = mimetypes.guess_type(getattr(file_obj, "name", "") or "")
    return guessed or "application/octet-stream"


# open an upload and return a small RGB(A) preview, or None if Pillow can't read it
def make_preview(file_obj, max_size=PREVIEW_MAX_SIZE):
    try:
        raw = read_upload(file_obj)
    except OSError as e:
        logger.warning("Could not read %s for preview: %s", getattr(file_obj, "name", "upload"), e)
        return None

    img = open_image(raw)
    if img is None:
        return None

    # if animated gif or webp, grab first frame
    if getattr(img, "is_animated", False):
        img.seek(0)

    # fix EXIF orientation
    img = ImageOps.exif_transpose(img)

    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "A" in img.mode or img.mode == "P" else "RGB")

    img.thumbnail(max_size, Image.Resampling.LANCZOS)
    return img


def file_to_base64(file_obj):
    """
    Read a whole upload and return its content base64 encoded.

    String content that is already a data URL only loses its "data:...," prefix.
    Raises EncodingError if the file can't be read.
    """
    name = getattr(file_obj, "name", "upload")
    try:
        data = read_upload(file_obj)
    except OSError as e:
        raise EncodingError(f"Failed to read {name}: {e}") from e

    if isinstance(data, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(data)).decode("ascii")
    if isinstance(data, str):
        if data.startswith("data:") and "," in data:
            return data.split(",", 1)[1]
        return base64.b64encode(data.encode("utf-8")).decode("ascii")

    raise EncodingError("Failed to read file as Base64 string.")


def decode_data_url(data_url):
    """Split a data:<mime>;base64,<payload> URL into (mime, bytes)."""
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:"):
        raise ValueError("Not a data URL")
    mime = header[len("data:"):].split(";", 1)[0] or "application/octet-stream"
    try:
        return mime, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def suggest_filename(original_name, ext):
    stem = os.path.splitext(os.path.basename(original_name or ""))[0] or "product"
    stem = stem.replace(" ", "_")
    return f"{stem}_with_logo.{ext.lstrip('.')}"


def open_image(raw):
    """Decode image bytes with Pillow, None if they aren't an image."""
    try:
        img = Image.open(io.BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning("Could not decode image bytes: %s", e)
        return None
    return img


def export_file(raw, export_format, source_mime=DEFAULT_RESULT_MIME):
    """
    Re-encode the generated image for download.

    Returns (bytes, mime, ext). "original" hands back the API bytes untouched.
    Raises ValueError if Pillow can't decode the image.
    """
    spec = EXPORT_FORMATS[export_format]
    if spec["mime"] is None:
        ext = mimetypes.guess_extension(source_mime or "") or ".png"
        return raw, source_mime, ext.lstrip(".")

    img = open_image(raw)
    if img is None:
        raise ValueError("Generated image could not be decoded")

    buf = io.BytesIO()
    if spec["mime"] == "image/png":
        img.save(buf, format="PNG", optimize=True)
    else:
        if img.mode in ("RGBA", "LA", "P"):
            # flatten any transparency onto white, JPEG has no alpha
            img = img.convert("RGBA")
            bg = Image.new("RGB", img.size, "#FFFFFF")
            bg.paste(img, mask=img.split()[-1])
            img = bg
        elif img.mode != "RGB":
            img = img.convert("RGB")
        img.save(buf, format="JPEG", quality=92, optimize=True)

    return buf.getvalue(), spec["mime"], spec["ext"]
