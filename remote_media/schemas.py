"""Core data models — shared Pydantic types for the remote media rewriter.

Attachment records, responsive-image sources and the cache envelope all
flow through these types.

This is a Tier 1 leaf module: it imports only from pydantic and the stdlib.
No project imports allowed — everything else imports from here.

Usage:
    from remote_media.schemas import SrcsetSource, ScalarEntry, SerializedEntry
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

AttachmentId = int


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------


class AttachmentRecord(BaseModel):
    """A stored media asset as the attachment store sees it.

    The locator is the stored file URL (or path) that resolution
    matches against. Frozen — records are owned by the host store.
    """

    model_config = ConfigDict(frozen=True)

    id: AttachmentId
    locator: str


# ---------------------------------------------------------------------------
# Responsive images
# ---------------------------------------------------------------------------


class SrcsetSource(BaseModel):
    """One entry of a responsive-image source set.

    descriptor/value form the srcset candidate ("300w", "2x"). Unknown
    fields supplied by the host are kept as extras and survive a rewrite
    untouched — only url is ever replaced.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    url: str
    descriptor: Literal["w", "x"] = "w"
    value: int | float = 0


# ---------------------------------------------------------------------------
# Cache envelope — type tag stored alongside the payload
# ---------------------------------------------------------------------------


class ScalarEntry(BaseModel):
    """A string or number cached verbatim."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    value: str | int | float | None = None


class SerializedEntry(BaseModel):
    """A composite, boolean or model value cached as a JSON document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["serialized"] = "serialized"
    payload: str


CacheEnvelope = Annotated[
    Union[ScalarEntry, SerializedEntry],
    Field(discriminator="kind"),
]

# Decodes a stored envelope without sniffing the payload's shape.
envelope_adapter: TypeAdapter[ScalarEntry | SerializedEntry] = TypeAdapter(CacheEnvelope)
