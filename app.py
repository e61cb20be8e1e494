import logging

import streamlit as st
from config import LOG_LEVEL
from pages_logo_placer import render_logo_placer_page

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="AI Logo Placer", page_icon="✨", layout="wide")

render_logo_placer_page()
