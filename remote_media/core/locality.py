"""Locality classifier — was this attachment uploaded here since the last sync?

An attachment is local iff its metadata carries a truthy locality flag.
The flag is written once, by mark_local, when the host reports a newly
created attachment. It is never cleared.

mark_local runs for every attachment created after activation, whatever
its origin. An attachment copied in from production by some other tool
after activation is therefore classified local too. This is a known
approximation and is kept as is.

Reads are not cached here; the host's metadata store does its own caching.

Tier 2 module: imports from remote_media.hooks.interfaces and
remote_media.schemas (Tier 1).
"""

import logging

from remote_media.config import DEFAULT_PREFIX, prefixed
from remote_media.hooks.interfaces import AttachmentMetaStore
from remote_media.schemas import AttachmentId

logger = logging.getLogger("remote_media")

LOCAL_MEDIA_META_KEY = prefixed(DEFAULT_PREFIX, "local_media")


class LocalityClassifier:
    """Reads and writes the per-attachment locality flag."""

    def __init__(self, meta: AttachmentMetaStore, meta_key: str = LOCAL_MEDIA_META_KEY) -> None:
        """Initialises the classifier.

        Args:
            meta: The host's attachment metadata store.
            meta_key: Metadata field holding the flag.
        """
        self._meta = meta
        self.meta_key = meta_key

    def is_local(self, attachment_id: AttachmentId | None) -> bool:
        """True iff the attachment exists and is flagged local. None is remote."""
        if attachment_id is None:
            return False
        return bool(self._meta.get_meta(attachment_id, self.meta_key))

    def mark_local(self, attachment_id: AttachmentId) -> None:
        """Flags a newly created attachment as local. Handler for attachment_added."""
        self._meta.set_meta(attachment_id, self.meta_key, True)
        logger.debug("Marked attachment %s as local media.", attachment_id)
