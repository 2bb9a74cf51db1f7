# pointnow_console/__init__.py
# SPDX-License-Identifier: Apache-2.0
"""PointNow loyalty console: a Streamlit front end for the PointNow backend."""

__version__ = "0.1.0"
