"""
Document model for the knowledge base.

A Document is one KB article. Its JSON form uses camelCase keys (usageCount,
createdAt, lastUsed), matching article files exported from the browser
version of the tool, so those files import unchanged.
"""

import random
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import config

DIFFICULTIES = ("Low", "Medium", "High")

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str = None) -> str:
    """Return a new opaque id such as ``kb-4f9x2ab``."""
    if prefix is None:
        prefix = config.ID_PREFIX
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(7))
    return f"{prefix}-{suffix}"


def utc_now() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def clamp_priority(value: Any) -> int:
    """
    Coerce a priority to an int in [MIN_PRIORITY, MAX_PRIORITY].

    Values that cannot be read as a finite number fall back to DEFAULT_PRIORITY.
    """
    try:
        priority = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return config.DEFAULT_PRIORITY
    return max(config.MIN_PRIORITY, min(config.MAX_PRIORITY, priority))


def coerce_usage(value: Any) -> int:
    """Read a usage count; anything that is not a finite non-negative number is 0."""
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError, OverflowError):
        return 0


def normalize_difficulty(value: Any) -> str:
    if isinstance(value, str):
        for level in DIFFICULTIES:
            if value.strip().lower() == level.lower():
                return level
    return config.DEFAULT_DIFFICULTY


def normalize_tags(tags: Any) -> List[str]:
    """Trim tags, drop blanks and duplicates (case-insensitive), keep order and case."""
    if isinstance(tags, str):
        tags = tags.split(",")
    if not isinstance(tags, (list, tuple)):
        return []
    seen = set()
    result = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        tag = tag.strip()
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            result.append(tag)
    return result


@dataclass
class Document:
    """
    A knowledge-base article.

    priority is kept clamped to [0, 100] and usage_count never goes below
    zero; use record_use() to increment it.
    """
    id: str
    title: str
    tags: List[str] = field(default_factory=list)
    body: str = ""
    usage_count: int = 0
    priority: int = 50
    difficulty: str = "Medium"
    created_at: str = field(default_factory=utc_now)
    last_used: Optional[str] = None

    def __post_init__(self):
        self.tags = normalize_tags(self.tags)
        self.priority = clamp_priority(self.priority)
        self.difficulty = normalize_difficulty(self.difficulty)
        self.usage_count = coerce_usage(self.usage_count)

    @property
    def search_text(self) -> str:
        """Title, tags and body joined the way they are indexed."""
        return f"{self.title or ''} {' '.join(self.tags)} {self.body or ''}"

    def has_tag(self, tag: str) -> bool:
        wanted = (tag or "").lower()
        return any(t.lower() == wanted for t in self.tags)

    def record_use(self, when: Optional[str] = None) -> None:
        """Count one more attach of this article."""
        self.usage_count += 1
        self.last_used = when or utc_now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "id": self.id,
            "title": self.title,
            "tags": list(self.tags),
            "body": self.body,
            "usageCount": self.usage_count,
            "priority": self.priority,
            "difficulty": self.difficulty,
            "createdAt": self.created_at,
        }
        if self.last_used:
            data["lastUsed"] = self.last_used
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """
        Create a document from its JSON form.

        Missing fields take their defaults. A missing id gets a freshly
        generated one.

        Args:
            data: Dictionary with document fields.

        Returns:
            Document instance.
        """
        return cls(
            id=str(data.get("id") or generate_id()),
            title=str(data.get("title") or ""),
            tags=data.get("tags") or [],
            body=str(data.get("body") or ""),
            usage_count=coerce_usage(data.get("usageCount", data.get("usage_count", 0))),
            priority=data.get("priority", config.DEFAULT_PRIORITY),
            difficulty=data.get("difficulty", config.DEFAULT_DIFFICULTY),
            created_at=data.get("createdAt") or data.get("created_at") or utc_now(),
            last_used=data.get("lastUsed") or data.get("last_used"),
        )
