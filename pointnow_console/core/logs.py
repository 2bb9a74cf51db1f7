# pointnow_console/core/logs.py
# SPDX-License-Identifier: Apache-2.0
"""Process-wide logging setup.

`configure_logging()` is called once from `app.py`. Modules obtain their own
logger with `logging.getLogger(__name__)` and never configure handlers
themselves.

Never log access tokens, passwords or full recipient lists.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler with the console's log format.

    Unknown level names fall back to INFO. Streamlit reruns the entry script
    on every interaction; `basicConfig` is a no-op once a handler exists, so
    repeated calls are safe.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    # urllib3 is chatty at DEBUG (connection pool churn); keep it quieter.
    logging.getLogger("urllib3").setLevel(max(resolved, logging.INFO))
