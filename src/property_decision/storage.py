"""
Snapshot persistence for the input record.

Snapshots live in a small JSON key-value file: {key: serialized PropertyInputs}.
Only the input record is stored; results are always recomputed. A missing
file, missing key or unreadable snapshot falls back to DEFAULT_INPUTS.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from property_decision.config import settings
from property_decision.data.defaults import DEFAULT_INPUTS
from property_decision.models import PropertyInputs

logger = logging.getLogger(__name__)


class SnapshotStore:
    def __init__(self, path: Optional[Path] = None, key: Optional[str] = None) -> None:
        self.path = Path(path or settings.snapshot_path).expanduser()
        self.key = key or settings.snapshot_key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read snapshot store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Snapshot store %s is not a JSON object; ignoring", self.path)
            return {}
        return data

    def load_inputs(self) -> PropertyInputs:
        """Saved input record, or DEFAULT_INPUTS when none can be used."""
        raw = self._read_all().get(self.key)
        if raw is None:
            logger.debug("No snapshot under %r; using defaults", self.key)
            return DEFAULT_INPUTS
        try:
            return PropertyInputs.model_validate(raw)
        except ValidationError as e:
            logger.warning("Snapshot %r is invalid, using defaults: %s", self.key, e)
            return DEFAULT_INPUTS

    def save_inputs(self, inputs: PropertyInputs) -> None:
        """Write the snapshot, keeping any other keys in the store."""
        data = self._read_all()
        data[self.key] = inputs.model_dump(mode="json")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.info("Saved snapshot %r to %s", self.key, self.path)

    def clear(self) -> None:
        data = self._read_all()
        if data.pop(self.key, None) is not None:
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
