from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from config import DEFAULT_PROMPT
from workflow import MISSING_IMAGES_MESSAGE, WorkflowStatus

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def app():
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    return at


def test_page_renders_idle_state(app):
    assert not app.exception
    assert app.title[0].value == "AI Logo Placer"
    assert app.text_area(key="prompt_input").value == DEFAULT_PROMPT
    assert not app.button(key="generate_button").disabled
    assert any("will appear here" in info.value for info in app.info)
    assert len(app.error) == 0


def test_generate_without_images_shows_validation_error(app):
    app.button(key="generate_button").click().run()

    assert not app.exception
    assert [e.value for e in app.error] == [MISSING_IMAGES_MESSAGE]
    assert app.session_state["logo_placer_state"].status.value == WorkflowStatus.IDLE.value


def test_prompt_edits_reach_the_state(app):
    app.text_area(key="prompt_input").set_value("Bottom left, small").run()

    assert app.session_state["logo_placer_state"].prompt == "Bottom left, small"
