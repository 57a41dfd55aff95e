from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import shutil


def _ts() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def backup_file(src: Path, dst_dir: Optional[Path] = None) -> Optional[Path]:
    """Copy src to <dst_dir>/<stem>_<timestamp><suffix>. Returns None if src is missing."""
    src = Path(src)
    if not src.exists():
        return None
    dst_dir = Path(dst_dir) if dst_dir else src.parent / "backups"
    dst_dir.mkdir(parents=True, exist_ok=True)
    dst = dst_dir / f"{src.stem}_{_ts()}{src.suffix}"
    n = 1
    while dst.exists():
        dst = dst_dir / f"{src.stem}_{_ts()}_{n}{src.suffix}"
        n += 1
    shutil.copy2(src, dst)
    return dst
