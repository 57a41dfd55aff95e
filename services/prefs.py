from __future__ import annotations
from pathlib import Path
from typing import Optional
import json, logging, os

log = logging.getLogger(__name__)

PREFS_NAME = "user_prefs.json"


def prefs_file(prefs_dir: Optional[str] = None) -> Path:
    base = prefs_dir or os.getenv("PROMPT_PREFS_DIR") or str(Path.home() / ".promptmanager")
    return Path(base).expanduser() / PREFS_NAME


def load(prefs_dir: Optional[str] = None) -> dict:
    path = prefs_file(prefs_dir)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("Reading prefs failed (%s): %s", path, e)
            return {}
        return data if isinstance(data, dict) else {}
    return {}


def save(data: dict, prefs_dir: Optional[str] = None) -> None:
    path = prefs_file(prefs_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        log.warning("Writing prefs failed (%s): %s", path, e)
