"""URL rewriter — points remote (pre-sync) media URLs at the remote origin.

A URL whose attachment is flagged local is returned unchanged. Every
other URL gets the remote origin's scheme and host; path, query and
fragment are kept as they are. The transform is a projection, so
rewriting an already rewritten URL is a no-op.

Failure policy is "serve the original URL": a disabled origin, a URL
that cannot be split, or a non-web scheme (data:, mailto:, ...) all pass
through untouched.

Tier 3 orchestration module: imports from remote_media.core.resolver,
remote_media.core.locality (Tier 2), config and schemas (Tier 1).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from urllib.parse import SplitResult, urlsplit, urlunsplit

from remote_media.config import RemoteOrigin
from remote_media.core.locality import LocalityClassifier
from remote_media.core.resolver import AttachmentResolver
from remote_media.schemas import SrcsetSource

logger = logging.getLogger("remote_media")

# Resolution suffix the host appends to resized images: photo-300x200.jpg
SIZE_SUFFIX_RE = re.compile(r"-\d+[Xx]\d+")

_REWRITABLE_SCHEMES = ("", "http", "https")


def strip_size_suffix(url: str) -> str:
    """Removes resolution suffixes from a URL's path, leaving the rest intact.

    Raises:
        ValueError: If the URL cannot be split into components.
    """
    parts = urlsplit(url)
    return urlunsplit(parts._replace(path=SIZE_SUFFIX_RE.sub("", parts.path)))


class UrlRewriter:
    """Rewrites single asset URLs and responsive source sets."""

    def __init__(
        self,
        origin: RemoteOrigin | None,
        resolver: AttachmentResolver,
        classifier: LocalityClassifier,
    ) -> None:
        """Initialises the rewriter.

        Args:
            origin: Validated remote origin. None disables rewriting.
            resolver: Maps URLs to attachment ids.
            classifier: Decides whether an attachment is local.
        """
        self.origin = origin
        self._resolver = resolver
        self._classifier = classifier

    def rewrite(self, url: str) -> str:
        """Returns url pointed at the remote origin, unless its attachment is local.

        Handler for the host's attachment_url filter.
        """
        if self.origin is None:
            return url
        parts = self._split(url)
        if parts is None:
            return url
        if self._classifier.is_local(self._resolver.resolve(url)):
            return url
        return self._to_remote(parts)

    def rewrite_set(self, sources: Sequence[SrcsetSource]) -> list[SrcsetSource]:
        """Rewrites a responsive source set.

        The base attachment is looked up once, from the first entry with
        its resolution suffix stripped. A local base leaves the whole set
        untouched. Otherwise every entry goes through rewrite() on its own,
        so an entry gets the same url here as it would from the
        attachment_url filter; order and every other field are preserved.
        Handler for the host's image_srcset filter.

        Args:
            sources: Entries of one source set, in the host's order.

        Returns:
            A new list. Equal to the input when nothing is rewritten.
        """
        if not sources or self.origin is None:
            return list(sources)

        try:
            base_url = strip_size_suffix(sources[0].url)
        except ValueError:
            logger.debug("Malformed srcset base URL %r, leaving set unchanged.", sources[0].url)
            return list(sources)

        if self._classifier.is_local(self._resolver.resolve(base_url)):
            return list(sources)

        rewritten: list[SrcsetSource] = []
        for source in sources:
            url = self.rewrite(source.url)
            if url == source.url:
                rewritten.append(source)
            else:
                rewritten.append(source.model_copy(update={"url": url}))
        return rewritten

    def _split(self, url: str) -> SplitResult | None:
        """Splits url, or returns None if it must pass through unchanged."""
        try:
            parts = urlsplit(url)
        except ValueError:
            logger.debug("Malformed media URL %r, leaving unchanged.", url)
            return None
        if parts.scheme.lower() not in _REWRITABLE_SCHEMES:
            return None
        if not parts.netloc and not parts.path:
            return None
        return parts

    def _to_remote(self, parts: SplitResult) -> str:
        return urlunsplit(
            (self.origin.scheme, self.origin.host, parts.path, parts.query, parts.fragment)
        )
