# pointnow_console/views/__init__.py
# SPDX-License-Identifier: Apache-2.0
"""One module per console screen; each exposes ``render(ctx)``.

Kept out of a ``pages/`` directory so Streamlit does not turn the modules into
its own multipage navigation.
"""
