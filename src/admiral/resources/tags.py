"""Tag registry resource wrapper."""

from __future__ import annotations

from typing import Optional, Sequence, cast

from .base import Resource
from .tags_types import Tag, TagAssignmentRequest, TagResponse, parse_tag
from ..errors import TagResolutionFailure, TransportFailure
from ..utils import TAG_ASSIGNMENT_PATH, TAGS_PATH


def _quote(value: str) -> str:
    return value.replace("'", "''")


class Tags(Resource):
    """Tag registry operations."""

    def find(self, tag: Tag, *, timeout: Optional[int] = None) -> Optional[str]:
        """Return the link of the registered tag equal to ``tag``, if any.

        Raises
        ------
        TransportFailure
            If the registry query fails.
        """
        params = {
            "expand": "true",
            "$filter": f"key eq '{_quote(tag.key)}' and value eq '{_quote(tag.value)}'",
        }
        response = self._get(TAGS_PATH, params=params, timeout=timeout)
        if not isinstance(response, dict):
            return None
        links = response.get("documentLinks")
        if isinstance(links, list) and links:
            return str(links[0])
        return None

    def resolve_existing(self, text: str, *, timeout: Optional[int] = None) -> Optional[str]:
        """Return the link for ``key:value`` text without creating anything.

        Unparsable or unknown tags give ``None``.
        """
        try:
            tag = parse_tag(text)
        except ValueError:
            self._logger.warning("Ignoring invalid tag: %r", text)
            return None
        return self.find(tag, timeout=timeout)

    def resolve_or_create(self, text: str, *, timeout: Optional[int] = None) -> str:
        """Return the link for ``key:value`` text, registering the tag if needed.

        Raises
        ------
        TagResolutionFailure
            If the text is not a valid tag, or the registry lookup or creation fails.
        """
        try:
            tag = parse_tag(text)
        except ValueError as exc:
            raise TagResolutionFailure(str(exc)) from exc
        try:
            link = self.find(tag, timeout=timeout)
            if link:
                return link
            response = self._post(TAGS_PATH, json=tag.to_dict(), timeout=timeout)
        except TransportFailure as exc:
            raise TagResolutionFailure(f"Could not resolve tag {text!r}: {exc}") from exc

        created = response.get("documentSelfLink") if isinstance(response, dict) else None
        if isinstance(created, str) and created:
            self._logger.debug("Created tag %s as %s", tag, created)
            return created
        raise TagResolutionFailure(f"Create tag response for {text!r} missing documentSelfLink.")

    def get(self, link: str, *, timeout: Optional[int] = None) -> Optional[TagResponse]:
        """Fetch a tag document by link."""
        response = self._get(link, timeout=timeout)
        if isinstance(response, dict):
            return cast(TagResponse, response)
        return None

    def describe(self, links: Sequence[str], *, timeout: Optional[int] = None) -> str:
        """Render tag links as ``[key:value, ...]`` for display."""
        labels: list[str] = []
        for link in links:
            tag = self.get(link, timeout=timeout)
            if tag is None:
                continue
            labels.append(str(Tag(key=tag.get("key", ""), value=tag.get("value", ""))))
        return "[" + ", ".join(labels) + "]"

    def assign(self, request: TagAssignmentRequest, *, timeout: Optional[int] = None) -> None:
        """Send a tag assignment request.

        Raises
        ------
        TransportFailure
            If the assignment call fails.
        """
        self._post(TAG_ASSIGNMENT_PATH, json=request.to_dict(), timeout=timeout)
