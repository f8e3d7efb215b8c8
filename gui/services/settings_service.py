import logging
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import set_key

from gui.utils.logging import log

ENV_PATH = Path(__file__).resolve().parents[2] / '.env'


def save_settings(values: Dict[str, str], env_path: Optional[Path] = None) -> None:
    """Apply launcher settings to the environment and persist them to .env."""
    path = Path(env_path or ENV_PATH)
    for key, value in values.items():
        os.environ[key] = str(value)
        if path.exists():
            set_key(str(path), key, str(value))
    log(f"Saved {len(values)} settings to {path.name}", logging.INFO)
