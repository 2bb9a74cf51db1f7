# pointnow_console/ui/layout.py
# SPDX-License-Identifier: Apache-2.0
"""Page chrome for the console.

`configure_page` must run before any other Streamlit call in the entry
script (Streamlit rejects `st.set_page_config` afterwards).
"""

from __future__ import annotations

from collections.abc import Sequence

import streamlit as st
from streamlit.delta_generator import DeltaGenerator


def configure_page(title: str) -> None:
    """Set the browser title and wide layout, and print the in-app title."""
    st.set_page_config(page_title=title, page_icon="⭐", layout="wide")
    st.title(f"⭐ {title}")


def view_header(title: str, caption: str | None = None) -> None:
    st.header(title)
    if caption:
        st.caption(caption)


def stack_or_columns_spec(
    spec: int | Sequence[float] | Sequence[int],
    stacked: bool,
) -> list[DeltaGenerator]:
    """Columns per `spec`, or the same number of stacked containers.

    The counter dashboard stacks its panels when the operator picks the tablet
    layout; the call site unpacks containers either way:

        left, right = stack_or_columns_spec(2, stacked=stacked)
    """
    if stacked:
        count = spec if isinstance(spec, int) else len(spec)
        return [st.container() for _ in range(count)]
    return st.columns(spec)
