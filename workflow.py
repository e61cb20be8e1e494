"""
Submission workflow for the AI Logo Placer app.

Holds the page state (selected files, prompt, result, status) and the
transitions Idle -> Loading -> Succeeded | Failed. Nothing here imports
Streamlit; the page keeps a WorkflowState in st.session_state and calls these
functions from its widget callbacks.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from PIL import Image

from config import DEFAULT_PROMPT
from generation import (
    LogoPlacerError,
    ValidationError,
    build_payload,
    extract_image_data,
    post_generate_content,
)
from utils import file_to_base64, guess_mime_type, make_preview

logger = logging.getLogger(__name__)

MISSING_IMAGES_MESSAGE = "Please upload both a product image and a logo."
MISSING_PROMPT_MESSAGE = "Please provide a prompt to guide the AI."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class WorkflowStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class IntakeSlot:
    """Which uploader a file came from and where it is stored on the state."""

    key: str
    label: str
    attr: str


PRODUCT_SLOT = IntakeSlot(key="product_upload", label="1. Product Image", attr="product")
LOGO_SLOT = IntakeSlot(key="logo_upload", label="2. Logo Image", attr="logo")


@dataclass
class SelectedFile:
    file: Any
    name: str
    mime_type: str
    preview: Optional[Image.Image] = None

    @classmethod
    def from_upload(cls, upload):
        return cls(
            file=upload,
            name=getattr(upload, "name", "upload"),
            mime_type=guess_mime_type(upload),
            preview=make_preview(upload),
        )

    def release(self):
        if self.preview is not None:
            self.preview.close()
            self.preview = None


@dataclass
class WorkflowState:
    product: Optional[SelectedFile] = None
    logo: Optional[SelectedFile] = None
    prompt: str = DEFAULT_PROMPT
    generated_image: str = ""
    status: WorkflowStatus = WorkflowStatus.IDLE
    error: str = ""

    @property
    def is_loading(self):
        return self.status is WorkflowStatus.LOADING

    def release(self):
        for slot in (PRODUCT_SLOT, LOGO_SLOT):
            selected = getattr(self, slot.attr)
            if selected is not None:
                selected.release()


def handle_file_change(state, slot, uploaded):
    """
    Store a newly picked file for one slot.

    `uploaded` may be a single upload, a list (only the first entry is used)
    or None when the uploader was cleared.
    """
    if isinstance(uploaded, (list, tuple)):
        uploaded = uploaded[0] if uploaded else None

    previous = getattr(state, slot.attr)
    if previous is not None:
        previous.release()

    if uploaded is None:
        setattr(state, slot.attr, None)
        return None

    selected = SelectedFile.from_upload(uploaded)
    setattr(state, slot.attr, selected)
    state.error = ""
    logger.info("%s selected: %s (%s)", slot.attr, selected.name, selected.mime_type)
    return selected


def validate_inputs(state):
    if state.product is None or state.logo is None:
        raise ValidationError(MISSING_IMAGES_MESSAGE)
    if not (state.prompt or "").strip():
        raise ValidationError(MISSING_PROMPT_MESSAGE)


def begin_submission(state):
    """Move to Loading if the inputs are complete. Returns False when nothing started."""
    if state.is_loading:
        logger.info("Submission already in flight, ignoring")
        return False

    try:
        validate_inputs(state)
    except ValidationError as e:
        state.error = e.message
        return False

    state.status = WorkflowStatus.LOADING
    state.generated_image = ""
    state.error = ""
    logger.info("Submission started for %s + %s", state.product.name, state.logo.name)
    return True


def run_submission(state, api_key=None, url=None, session=None):
    """Encode, send and extract. Always leaves the Loading state."""
    try:
        product_b64 = file_to_base64(state.product.file)
        logo_b64 = file_to_base64(state.logo.file)

        payload = build_payload(
            state.prompt,
            (state.product.mime_type, product_b64),
            (state.logo.mime_type, logo_b64),
        )
        result = post_generate_content(payload, api_key=api_key, url=url, session=session)
        state.generated_image = extract_image_data(result)
        state.status = WorkflowStatus.SUCCEEDED
        logger.info("Image generated for %s", state.product.name)
    except LogoPlacerError as e:
        logger.error("Submission failed: %s", e.message)
        state.error = e.message
        state.status = WorkflowStatus.FAILED
    except Exception as e:
        logger.exception("Unexpected error during submission")
        state.error = str(e) or UNEXPECTED_ERROR_MESSAGE
        state.status = WorkflowStatus.FAILED
    finally:
        if state.is_loading:
            state.status = WorkflowStatus.FAILED
            state.error = state.error or UNEXPECTED_ERROR_MESSAGE

    return state.status


def handle_generate(state, api_key=None, url=None, session=None):
    if not begin_submission(state):
        return state.status
    return run_submission(state, api_key=api_key, url=url, session=session)
