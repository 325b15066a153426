"""JSON cache of the last flavor snapshot."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Union

from .models import Snapshot, snapshot_from_dict, snapshot_to_dict
from .utils import warn

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class MalformedPriorData(ValueError):
    """Raised when the cache file exists but cannot be read as a snapshot."""


def load_snapshot(path: PathLike) -> Snapshot:
    """Load the cached snapshot.

    A missing file is not an error: it returns an empty snapshot so the whole
    current menu reads as new.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning(warn("no cache file exists at %s"), p)
        return {}
    except OSError as e:
        raise MalformedPriorData(f"cannot read cache {p}: {e}") from e

    try:
        snapshot = snapshot_from_dict(json.loads(raw))
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too.
        raise MalformedPriorData(f"invalid cache {p}: {e}") from e

    logger.info("Discovered valid cache at %s (%d sections)", p, len(snapshot))
    return snapshot


def save_snapshot(path: PathLike, snapshot: Snapshot) -> None:
    """Overwrite the cache with `snapshot`."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".tmp")

    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(snapshot_to_dict(snapshot), f, ensure_ascii=False, indent=2)
    os.replace(tmp, p)
    logger.info("Wrote cache to %s", p)


__all__ = ["MalformedPriorData", "load_snapshot", "save_snapshot"]
