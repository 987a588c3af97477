#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the Datanest project.

The project structure:
    ROOT/
    ├── datanest/      # Package source
    │   └── migrations # Alembic migration scripts
    ├── data/          # User data (the snippet database)
    └── logs/          # Application logs

Every path here is only a default; the CLI accepts overrides for the
database, Alembic and log locations.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/datanest/core/paths.py.

    Returns:
        Path object for project root

    Raises:
        RuntimeError: If project root cannot be determined
    """
    current_file = Path(__file__).resolve()

    # Navigate up: paths.py -> core/ -> datanest/ -> ROOT/
    root = current_file.parent.parent.parent

    if not (root / "datanest").is_dir():
        raise RuntimeError(
            f"Cannot determine valid project root. "
            f"Expected {root / 'datanest'} to exist. "
            f"Current file: {current_file}"
        )

    return root


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "datanest"
DATA_DIR = ROOT / "data"

# --- Database ---
ALEMBIC_INI = ROOT / "alembic.ini"
ALEMBIC_DIR = PACKAGE_DIR / "migrations"
DB_PATH = DATA_DIR / "datanest.db"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
