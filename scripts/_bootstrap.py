from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def load_settings():
    from dotenv import load_dotenv

    from employee_attendance.config import get_settings_module

    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def describe(db_config: dict) -> str:
    return (
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
