# pointnow_console/services/__init__.py
# SPDX-License-Identifier: Apache-2.0
"""Pure helpers shared by the console views (no Streamlit, no HTTP)."""
