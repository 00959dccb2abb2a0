"""PostgreSQL storage implementation."""

import json
import logging
import os
import psycopg2
from psycopg2.extras import RealDictCursor

from core.config import CONFIG_FILE
from core.interfaces import Storage
from core.utils import format_timestamp

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """PostgreSQL-based storage implementation."""

    def __init__(self, config_file: str = None, db_url: str = None):
        self.config_file = config_file or CONFIG_FILE
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/arvo'
        )
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS card_progress (
                    user_id VARCHAR(255) NOT NULL,
                    card_id VARCHAR(255) NOT NULL,
                    level SMALLINT NOT NULL DEFAULT 0 CHECK (level BETWEEN 0 AND 5),
                    last_reviewed_at TIMESTAMPTZ,
                    due_at TIMESTAMPTZ,
                    updated_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (user_id, card_id)
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_card_progress_due
                ON card_progress(user_id, due_at)
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(f"Config file not found at {self.config_file}")
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def load_progress(self, user_id: str = "default") -> dict[str, dict]:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    """SELECT card_id, level, last_reviewed_at, due_at
                       FROM card_progress WHERE user_id = %s""",
                    (user_id,)
                )
                rows = cur.fetchall()
        except Exception as e:
            logger.error(f"Error loading progress for {user_id}: {e}")
            self.conn.rollback()
            raise
        return {
            row['card_id']: {
                'card_id': row['card_id'],
                'level': row['level'],
                'last_reviewed_at': format_timestamp(row['last_reviewed_at']),
                'due_at': format_timestamp(row['due_at'])
            }
            for row in rows
        }

    def save_card_progress(self, user_id: str, progress: dict) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO card_progress (user_id, card_id, level, last_reviewed_at, due_at, updated_at)
                    VALUES (%s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (user_id, card_id)
                    DO UPDATE SET level = EXCLUDED.level,
                                  last_reviewed_at = EXCLUDED.last_reviewed_at,
                                  due_at = EXCLUDED.due_at,
                                  updated_at = CURRENT_TIMESTAMP
                """, (
                    user_id,
                    progress['card_id'],
                    progress['level'],
                    progress.get('last_reviewed_at'),
                    progress.get('due_at')
                ))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error saving progress for {user_id}/{progress.get('card_id')}: {e}")
            self.conn.rollback()
            raise

    def reset_progress(self, user_id: str) -> int:
        try:
            with self.conn.cursor() as cur:
                cur.execute("DELETE FROM card_progress WHERE user_id = %s", (user_id,))
                removed = cur.rowcount
            self.conn.commit()
            return removed
        except Exception as e:
            logger.error(f"Error resetting progress for {user_id}: {e}")
            self.conn.rollback()
            raise

    def list_users(self) -> list[str]:
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT DISTINCT user_id FROM card_progress ORDER BY user_id")
                return [row[0] for row in cur.fetchall()]
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            self.conn.rollback()
            raise
