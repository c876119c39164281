import json
import logging
import os
from typing import Optional

import yaml

from inkloop.errors import SnapshotError
from inkloop.models import DashboardSnapshot
from inkloop.sample_data import DEFAULT_SNAPSHOT

logger = logging.getLogger(__name__)


def read_payload(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as handle:
        try:
            if path.endswith((".yaml", ".yml")):
                payload = yaml.safe_load(handle)
            else:
                payload = json.load(handle)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise SnapshotError(f"{path}: not a valid snapshot payload ({exc})") from exc
    if not isinstance(payload, dict):
        raise SnapshotError(f"{path}: expected a mapping at the top level")
    return payload


def load_snapshot(path: Optional[str] = None) -> DashboardSnapshot:
    if not path:
        logger.info("No snapshot path configured; using the built-in sample")
        return DEFAULT_SNAPSHOT
    if not os.path.exists(path):
        logger.warning("Snapshot %s not found; using the built-in sample", path)
        return DEFAULT_SNAPSHOT
    snapshot = DashboardSnapshot.from_dict(read_payload(path), source=path)
    logger.info("Loaded snapshot from %s", path)
    return snapshot
