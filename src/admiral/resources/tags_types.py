"""Types and parsing helpers for the tags resource.

Tags are written on the command line as ``key:value``. Only the first colon
separates key from value, so values may contain colons themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypedDict
from typing_extensions import ReadOnly


class TagResponse(TypedDict, total=False):
    """Readonly tag document returned by the tag registry."""
    key: ReadOnly[str]
    value: ReadOnly[str]
    documentSelfLink: ReadOnly[str]


@dataclass(frozen=True)
class Tag:
    key: str
    value: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}

    def __str__(self) -> str:
        return f"{self.key}:{self.value}"


def parse_tag(text: str) -> Tag:
    """Parse ``key:value`` tag text.

    Raises
    ------
    ValueError
        If the text is not a string or has an empty key.
    """
    if not isinstance(text, str):
        raise ValueError(f"Invalid tag input: {text!r}")
    key, _, value = text.strip().partition(":")
    key = key.strip()
    if not key:
        raise ValueError(f"Invalid tag input: {text!r}")
    return Tag(key=key, value=value.strip())


@dataclass
class TagAssignmentRequest:
    """Payload for the tag assignment endpoint.

    Assigning and unassigning tags of a resource goes through its own endpoint and is
    a separate call from patching the resource itself.
    """

    resource_link: str
    tags_to_assign: Optional[list[Tag]] = None
    tags_to_unassign: Optional[list[Tag]] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "resourceLink": self.resource_link,
            "tagsToAssign": [tag.to_dict() for tag in self.tags_to_assign]
            if self.tags_to_assign else None,
            "tagsToUnassign": [tag.to_dict() for tag in self.tags_to_unassign]
            if self.tags_to_unassign else None,
        }


__all__ = ["Tag", "TagAssignmentRequest", "TagResponse", "parse_tag"]
