# pointnow_console/ui/keys.py
# SPDX-License-Identifier: Apache-2.0
"""Namespaced Streamlit widget keys.

Several views reuse the same labels ("Search", "Page", "Save"). Without an
explicit key Streamlit derives the element id from the label and raises
`StreamlitDuplicateElementId` when two views render in one run, or silently
shares state between them. Every widget key is therefore built as
``"<view>:<name>"``:

    query = st.text_input("Search", key=k("customers", "query"))

Per-row widgets add the row id to the name:

    st.button("Edit", key=k("branches", f"edit_{branch['id']}"))
"""

from __future__ import annotations


def k(page: str, name: str) -> str:
    """Return the widget key ``"<page>:<name>"``.

    Both parts should be hardcoded identifiers or backend ids; never pass
    free text typed by the operator.
    """
    return f"{page}:{name}"
