"""
utils.py

Small collection of utilities: filesystem helpers, atomic writes for binary
R1CS files and JSON reports, timestamp generator, and a minimal logger setup
helper.
"""

from typing import Any, Optional
from pathlib import Path
import json
import tempfile
import os
from datetime import datetime, timezone
import logging


def ensure_dir(path: str) -> str:
    """
    Ensure directory exists; returns the path.
    """
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return str(p)


def write_bytes_atomic(path: str, data: bytes) -> None:
    """
    Write bytes to a temp file in the target directory and atomically move into place.
    """
    p = Path(path)
    ensure_dir(str(p.parent))
    fd, tmp = tempfile.mkstemp(prefix=p.name, dir=str(p.parent))
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, str(p))
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)


def write_json_atomic(path: str, data: Any, indent: int = 2) -> None:
    """
    Write JSON through write_bytes_atomic.
    """
    text = json.dumps(data, indent=indent, sort_keys=True, ensure_ascii=False)
    write_bytes_atomic(path, text.encode("utf-8"))


def read_json(path: str) -> Optional[Any]:
    """Parsed JSON document at path, or None when the file does not exist."""
    p = Path(path)
    if not p.exists():
        return None
    with p.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def timestamp_iso() -> str:
    """
    Return current UTC ISO timestamp without microseconds.
    """
    return datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None).isoformat()


def setup_basic_logger(name: str = "r1cs", level: int = logging.INFO) -> logging.Logger:
    """
    Return a logger configured with a StreamHandler and a compact formatter.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    ch = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger
