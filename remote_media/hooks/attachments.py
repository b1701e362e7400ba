"""In-memory attachment store — development stub for AttachmentStore
and AttachmentMetaStore.

Holds attachment records and their metadata in Python dicts. Ids are
assigned sequentially from 1, like an auto-increment column. Data lives
only in memory and is lost on restart.

HOST: Replace this with queries over your media tables. Subclass
AttachmentStore and AttachmentMetaStore from remote_media.hooks.interfaces.
SQLiteAttachmentStore shows an SQL implementation of both.

Tier 2 service module: imports from remote_media.hooks.interfaces (Tier 1)
and remote_media.schemas (Tier 1).

Usage:
    from remote_media.hooks.attachments import InMemoryAttachmentStore

    store = InMemoryAttachmentStore()
    attachment_id = store.add_attachment(
        "https://staging.example.com/wp-content/uploads/2019/01/photo.jpg"
    )
    store.find_ids_by_locator("/wp-content/uploads/2019/01/photo.jpg")  # [1]
"""

from typing import Any

from remote_media.hooks.interfaces import AttachmentMetaStore, AttachmentStore
from remote_media.schemas import AttachmentId, AttachmentRecord


class InMemoryAttachmentStore(AttachmentStore, AttachmentMetaStore):
    """STUB — dict-backed attachments and metadata.

    Records are keyed by id. Metadata is keyed by (attachment_id, field)
    tuples. Metadata may be written for ids that have no record, the
    same as a loose meta table with no foreign key.
    """

    def __init__(self) -> None:
        """Initialises empty stores."""
        self._records: dict[AttachmentId, AttachmentRecord] = {}
        self._meta: dict[tuple[AttachmentId, str], Any] = {}
        self._next_id = 1

    def add_attachment(self, locator: str) -> AttachmentId:
        """Inserts a record and returns its new id.

        Not part of the ABCs — this stands in for the host's own upload
        flow. Does not fire any event; hosts do that themselves.

        Args:
            locator: Stored file URL of the new attachment.

        Returns:
            The assigned attachment id.
        """
        attachment_id = self._next_id
        self._next_id += 1
        self._records[attachment_id] = AttachmentRecord(id=attachment_id, locator=locator)
        return attachment_id

    def find_ids_by_locator(self, fragment: str) -> list[AttachmentId]:
        return sorted(
            record.id for record in self._records.values() if fragment in record.locator
        )

    def get_meta(self, attachment_id: AttachmentId, field: str) -> Any:
        return self._meta.get((attachment_id, field))

    def set_meta(self, attachment_id: AttachmentId, field: str, value: Any) -> None:
        self._meta[(attachment_id, field)] = value
