"""File-based storage implementation."""

import json
import logging
import os
import re

from core.config import CONFIG_FILE, USER_ID_PATTERN
from core.interfaces import Storage

logger = logging.getLogger(__name__)

PROGRESS_PREFIX = 'arvo_progress_'


class FileStorage(Storage):
    """Stores each learner's progress as one JSON file: {card_id: record}."""

    def __init__(self, config_file: str = None, state_dir: str = None):
        self.config_file = config_file or CONFIG_FILE
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or os.environ.get('ARVO_STATE_DIR') or project_root

    def _get_progress_file(self, user_id: str) -> str:
        """Get progress file path for a user."""
        if not re.fullmatch(USER_ID_PATTERN, user_id):
            raise ValueError(f"Invalid user id: {user_id!r}")
        return os.path.join(self.state_dir, f'{PROGRESS_PREFIX}{user_id}.json')

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(f"Config file not found at {self.config_file}")
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def load_progress(self, user_id: str = "default") -> dict[str, dict]:
        progress_file = self._get_progress_file(user_id)
        if not os.path.exists(progress_file):
            return {}
        try:
            with open(progress_file, 'r') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable progress file {progress_file}: {e}")
            return {}
        if not isinstance(records, dict):
            logger.warning(f"Ignoring progress file {progress_file}: expected an object, got {type(records).__name__}")
            return {}
        return records

    def _save_progress(self, user_id: str, records: dict) -> None:
        os.makedirs(self.state_dir, exist_ok=True)
        with open(self._get_progress_file(user_id), 'w') as f:
            json.dump(records, f, indent=2)

    def save_card_progress(self, user_id: str, progress: dict) -> None:
        records = self.load_progress(user_id)
        records[progress['card_id']] = progress
        self._save_progress(user_id, records)

    def reset_progress(self, user_id: str) -> int:
        progress_file = self._get_progress_file(user_id)
        if not os.path.exists(progress_file):
            return 0
        removed = len(self.load_progress(user_id))
        os.remove(progress_file)
        return removed

    def list_users(self) -> list[str]:
        """List all user IDs with a progress file."""
        users = []
        if os.path.exists(self.state_dir):
            for filename in sorted(os.listdir(self.state_dir)):
                if filename.startswith(PROGRESS_PREFIX) and filename.endswith('.json'):
                    users.append(filename[len(PROGRESS_PREFIX):-len('.json')])
        return users
