"""
JSON document storage for the application state.

The whole AppState is written as a single document under one fixed key.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from ..core.config import STORAGE_KEY
from ..core.models import AppState
from .serializers import PersistenceFormatError, dict_to_state, state_to_dict

logger = logging.getLogger(__name__)


class StateStore:
    """
    Manages the saved state document.

    The document lives at ``<data_dir>/<key>.json``. Every save rewrites it
    completely; there are no partial writes.
    """

    def __init__(self, data_dir: str | Path, key: str = STORAGE_KEY):
        """
        Initialize the state store.

        Args:
            data_dir: Directory holding the document
            key: Storage key (file stem)
        """
        self.data_dir = Path(data_dir)
        self.key = key
        self.state_path = self.data_dir / f"{key}.json"

    def exists(self) -> bool:
        """Check if a saved document exists."""
        return self.state_path.exists()

    def load(self) -> AppState | None:
        """
        Load the saved state.

        A missing, unreadable or malformed document is treated as "no saved
        state"; the problem is logged, never raised.

        Returns:
            AppState if a valid document exists, None otherwise
        """
        if not self.state_path.exists():
            return None

        try:
            with open(self.state_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return dict_to_state(data)
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            RecursionError,
            PersistenceFormatError,
        ) as e:
            logger.warning("Failed to load data from %s: %s", self.state_path, e)
            return None

    def save(self, state: AppState) -> None:
        """
        Write the whole state.

        The document is written to a temporary file and moved into place,
        so a crash leaves either the previous or the new document.

        Args:
            state: State to save
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{self.key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(state_to_dict(state), f, indent=2)
            os.replace(tmp_name, self.state_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved state to %s", self.state_path)

    def clear(self) -> None:
        """
        Delete the saved document (dangerous - use with caution).
        """
        self.state_path.unlink(missing_ok=True)
        logger.debug("Removed %s", self.state_path)
