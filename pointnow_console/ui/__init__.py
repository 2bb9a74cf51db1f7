# pointnow_console/ui/__init__.py
# SPDX-License-Identifier: Apache-2.0
"""Streamlit building blocks shared by the views."""
