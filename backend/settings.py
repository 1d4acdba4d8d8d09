# backend/settings.py
import os
import json
import logging
from pathlib import Path
from typing import Any, Dict

CONFIG_FILE = os.getenv("FILE_CONFIG", "config.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logger = logging.getLogger("settings")
if not logger.handlers:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s | %(levelname)s | %(message)s")


def _load_config_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"[CONFIG] {path} not found, using defaults")
        return {}
    except (OSError, ValueError) as e:
        logger.warning(f"[CONFIG] {path} is unreadable ({e}), using defaults")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"[CONFIG] {path} is not a JSON object, using defaults")
        return {}
    return data


_file_cfg = _load_config_file(CONFIG_FILE)

ROOT_DIR = os.getenv("FILE_ROOT") or str(_file_cfg.get("dir") or "./public")
HOST = os.getenv("FILE_HOST") or str(_file_cfg.get("host") or "127.0.0.1")
PORT = int(os.getenv("FILE_PORT") or _file_cfg.get("port") or 8080)
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "1024"))

_root = None


def prepare_root(directory: str = ROOT_DIR) -> Path:
    """Create the served directory if needed and return it as an absolute path."""
    root = Path(directory).expanduser().resolve()
    root.mkdir(parents=True, exist_ok=True)
    return root


def get_root() -> Path:
    """FastAPI dependency returning the immutable root directory."""
    global _root
    if _root is None:
        _root = prepare_root()
        logger.info(f"[CONFIG] Serving files from {_root}")
    return _root
