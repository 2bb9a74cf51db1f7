# pointnow_console/core/__init__.py
# SPDX-License-Identifier: Apache-2.0
"""Configuration, session, storage and per-run state for the console."""
