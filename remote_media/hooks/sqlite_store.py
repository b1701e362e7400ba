"""SQLite attachment store — SQL implementation of AttachmentStore and
AttachmentMetaStore.

Two tables: ``attachments`` (id, locator) and ``attachment_meta``
(attachment_id, meta_key, meta_value). Metadata values are stored as JSON
text so booleans, numbers and strings come back with their type intact.

Locator matching uses ``instr()`` rather than ``LIKE``: the fragment matches
literally and case-sensitively, so ``_`` and ``%`` in file names are not
wildcards.

Tier 2 service module: imports from remote_media.hooks.interfaces (Tier 1)
and remote_media.schemas (Tier 1).

Usage:
    from remote_media.hooks.sqlite_store import SQLiteAttachmentStore

    store = SQLiteAttachmentStore(Path("media.db"))
    store.initialize()
    store.add_attachment("https://example.com/wp-content/uploads/a.jpg")
"""

import json
import sqlite3
from pathlib import Path
from typing import Any

from remote_media.hooks.interfaces import AttachmentMetaStore, AttachmentStore
from remote_media.schemas import AttachmentId

CREATE_ATTACHMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS attachments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    locator TEXT NOT NULL
)
"""

CREATE_ATTACHMENT_META_TABLE = """
CREATE TABLE IF NOT EXISTS attachment_meta (
    attachment_id INTEGER NOT NULL,
    meta_key TEXT NOT NULL,
    meta_value TEXT,
    PRIMARY KEY (attachment_id, meta_key)
)
"""

ALL_SCHEMA_STATEMENTS = [CREATE_ATTACHMENTS_TABLE, CREATE_ATTACHMENT_META_TABLE]


class SQLiteAttachmentStore(AttachmentStore, AttachmentMetaStore):
    """Attachment records and metadata in a SQLite database.

    Attributes:
        db_path: Path to the database file, or ":memory:".
    """

    def __init__(self, db_path: Path | str) -> None:
        """Initializes the store. The connection opens lazily.

        Args:
            db_path: Path to the SQLite database file, or ":memory:".
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._connection is None:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(self.db_path)
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> None:
        """Creates the tables if they don't exist yet."""
        with self.connection:
            for statement in ALL_SCHEMA_STATEMENTS:
                self.connection.execute(statement)

    def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def add_attachment(self, locator: str) -> AttachmentId:
        """Inserts an attachment record and returns its id."""
        with self.connection:
            cursor = self.connection.execute(
                "INSERT INTO attachments (locator) VALUES (?)", (locator,)
            )
        return int(cursor.lastrowid)

    def find_ids_by_locator(self, fragment: str) -> list[AttachmentId]:
        rows = self.connection.execute(
            "SELECT id FROM attachments WHERE instr(locator, ?) > 0 ORDER BY id",
            (fragment,),
        ).fetchall()
        return [row["id"] for row in rows]

    def get_meta(self, attachment_id: AttachmentId, field: str) -> Any:
        row = self.connection.execute(
            "SELECT meta_value FROM attachment_meta WHERE attachment_id = ? AND meta_key = ?",
            (attachment_id, field),
        ).fetchone()
        if row is None or row["meta_value"] is None:
            return None
        return json.loads(row["meta_value"])

    def set_meta(self, attachment_id: AttachmentId, field: str, value: Any) -> None:
        with self.connection:
            self.connection.execute(
                "INSERT OR REPLACE INTO attachment_meta (attachment_id, meta_key, meta_value) "
                "VALUES (?, ?, ?)",
                (attachment_id, field, json.dumps(value)),
            )
