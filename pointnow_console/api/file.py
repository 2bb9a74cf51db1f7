# pointnow_console/api/file.py
# SPDX-License-Identifier: Apache-2.0
"""Image upload (business gallery, reward artwork)."""

from __future__ import annotations

from typing import Any

from .client import ApiClient


def upload(
    client: ApiClient,
    filename: str,
    content: bytes,
    content_type: str = "application/octet-stream",
) -> dict[str, Any]:
    """Upload one file as multipart ``file``; returns ``data.image_url``."""
    return client.post("/file/upload", files={"file": (filename, content, content_type)})
