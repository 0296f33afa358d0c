"""
Durable single-record session store.

Keeps the last OAuth login in one JSON file so a server restart does not
force the operator through the provider login again. The file holds exactly
one record and every write replaces it wholesale.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from hh_airtable.models import PersistedSession, Token, UserIdentity

logger = logging.getLogger(__name__)


class TokenStore:
    """File backend for SessionRepository. Single writer, no locking."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> PersistedSession | None:
        """Read the stored record. Never raises; missing or corrupt file gives None."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return PersistedSession.model_validate(data)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading stored tokens from {self.path}: {e}")
            return None

    def save(self, token: Token, identity: UserIdentity | None = None) -> None:
        """Overwrite the record with a fresh savedAt stamp."""
        record = PersistedSession(tokens=token, user_info=identity, saved_at=datetime.now(UTC))
        try:
            self.path.write_text(
                json.dumps(record.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            logger.info("Tokens saved successfully")
        except OSError as e:
            logger.error(f"Error saving tokens to {self.path}: {e}")

    def clear(self) -> None:
        """Delete the record; a missing file is fine."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error deleting tokens file {self.path}: {e}")

    # SessionRepository
    def get(self) -> PersistedSession | None:
        return self.load()

    def set(self, token: Token, identity: UserIdentity | None) -> None:
        self.save(token, identity)
