from __future__ import annotations

import os
from pathlib import Path

HOME_ENV = "CLINIC_CALENDAR_HOME"


def app_dir(base_dir: str | Path | None = None) -> Path:
    """Directory holding ``config.json`` and ``logs/``.

    Resolved on every call: explicit ``base_dir``, then the
    ``CLINIC_CALENDAR_HOME`` environment variable, then the host's
    working directory.
    """
    if base_dir is not None:
        return Path(base_dir).expanduser().resolve()
    configured = os.getenv(HOME_ENV, "").strip()
    if configured:
        return Path(configured).expanduser().resolve()
    return Path.cwd()
