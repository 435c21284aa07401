from __future__ import annotations

import logging


def configure_app_logging(level: str = "INFO") -> None:
    """
    Set the level of the `grc_portal` logger tree.

    Uvicorn installs the handlers; set `APP_LOG_LEVEL=DEBUG` to see every
    RBAC decision (denials, unknown roles, unguarded routes).
    """

    normalized = level.upper()
    logging.getLogger("grc_portal").setLevel(normalized)
    logging.getLogger("grc_portal").propagate = True
