"""
Logo Placer page: upload a product photo and a logo, let Gemini place the logo.
"""

import streamlit as st
from config import ACCEPTED_IMAGE_TYPES, EXPORT_FORMATS
from utils import decode_data_url, export_file, open_image, suggest_filename
from workflow import (
    LOGO_SLOT,
    PRODUCT_SLOT,
    WorkflowState,
    begin_submission,
    handle_file_change,
    run_submission,
)

STATE_KEY = "logo_placer_state"
PROMPT_KEY = "prompt_input"


def get_state():
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = WorkflowState()
    return st.session_state[STATE_KEY]


def _on_file_change(slot):
    handle_file_change(get_state(), slot, st.session_state.get(slot.key))


def _on_generate():
    state = get_state()
    state.prompt = st.session_state.get(PROMPT_KEY, "")
    begin_submission(state)


def render_image_input(state, slot):
    """One upload card with its preview."""
    st.subheader(slot.label)
    st.file_uploader(
        "Click to upload image",
        type=ACCEPTED_IMAGE_TYPES,
        key=slot.key,
        on_change=_on_file_change,
        args=(slot,),
        disabled=state.is_loading,
    )

    selected = getattr(state, slot.attr)
    if selected is None:
        st.caption("No image selected yet")
    elif selected.preview is not None:
        st.image(selected.preview, caption=selected.name)
    else:
        st.caption(f"📎 {selected.name} (no preview available)")


def render_result(state):
    try:
        mime, raw = decode_data_url(state.generated_image)
    except ValueError as e:
        st.error(f"Could not read the generated image: {e}")
        return

    img = open_image(raw)
    if img is not None:
        st.image(img, caption="Generated result")
        formats = list(EXPORT_FORMATS.keys())
    else:
        st.warning("⚠️ The API returned data that can't be previewed as an image.")
        formats = ["original"]

    export_format = st.selectbox(
        "Download format",
        options=formats,
        format_func=lambda k: EXPORT_FORMATS[k]["label"],
        key="export_format",
    )
    data, out_mime, ext = export_file(raw, export_format, mime)
    product_name = state.product.name if state.product else "product"
    st.download_button(
        "📥 Download Image",
        data=data,
        file_name=suggest_filename(product_name, ext),
        mime=out_mime,
    )


def render_logo_placer_page():
    state = get_state()

    st.title("AI Logo Placer")
    st.caption("Upload a product image and a logo, then let AI place it perfectly.")

    st.markdown("""
**How it works:**
1. 📤 Upload your product photo
2. 🏷️ Upload the logo you want placed
3. 📝 Adjust the instructions if needed
4. ✨ Generate and download the result
""")

    st.markdown("---")

    left, right = st.columns(2)

    with left:
        col1, col2 = st.columns(2)
        with col1:
            render_image_input(state, PRODUCT_SLOT)
        with col2:
            render_image_input(state, LOGO_SLOT)

        if PROMPT_KEY not in st.session_state:
            st.session_state[PROMPT_KEY] = state.prompt
        state.prompt = st.text_area(
            "3. Instructions",
            key=PROMPT_KEY,
            height=160,
            placeholder="e.g., Place the logo on the top right corner",
            disabled=state.is_loading,
        )

        st.button(
            "Generating..." if state.is_loading else "✨ Generate Image",
            key="generate_button",
            type="primary",
            on_click=_on_generate,
            disabled=state.is_loading,
        )

        if state.error:
            st.error(state.error)

    with right:
        st.header("Result")
        if state.is_loading:
            with st.spinner("Placing your logo..."):
                run_submission(state)
            st.rerun()
        elif state.generated_image:
            render_result(state)
        else:
            st.info("🖼️ Your generated image will appear here.")
