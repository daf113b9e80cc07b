"""
Metadata Registry

Out-of-band storage for information attached to a class or one of its
members. Entries are addressed by ``(subject, member, key)``; ``member=None``
addresses the class itself.

Subjects are normalized before lookup: an instance shares the bucket of its
class, so metadata attached while a class is being bootstrapped is reachable
later from a realized instance.

Example:
    registry = MetadataRegistry()
    registry.define(ArticleController, "path", "/article")
    registry.define(ArticleController, "method", "GET", member="get_detail")

    registry.get(ArticleController(), "path")            # "/article"
    registry.list_members(ArticleController)              # ["get_detail"]
"""

from typing import Any, Dict, List, Optional
import logging
import threading

logger = logging.getLogger("lattice.metadata")


class _Missing:
    """Sentinel type for "no value stored"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def subject_of(subject: Any) -> type:
    """Return the class that owns ``subject``'s metadata bucket."""
    if isinstance(subject, type):
        return subject
    return type(subject)


class MetadataRegistry:
    """
    Store associating a value with a ``(subject, member, key)`` triple.

    Reads and writes are guarded by a re-entrant lock so the registry can be
    shared by concurrent readers once bootstrap has finished.
    """

    __slots__ = ("_entries", "_members", "_lock")

    def __init__(self):
        # {subject: {member: {key: value}}}; dicts keep definition order
        self._entries: Dict[type, Dict[Optional[str], Dict[str, Any]]] = {}
        # {subject: [member, ...]} in first-definition order
        self._members: Dict[type, List[str]] = {}
        self._lock = threading.RLock()

    def define(
        self,
        subject: Any,
        key: str,
        value: Any,
        member: Optional[str] = None,
    ) -> None:
        """
        Store (or overwrite) a metadata value.

        Repeating an identical call leaves the registry unchanged.

        Args:
            subject: Class or instance the metadata belongs to
            key: Metadata key
            value: Value to store
            member: Member name, or None for class-level metadata
        """
        owner = subject_of(subject)
        with self._lock:
            buckets = self._entries.setdefault(owner, {})
            if member is not None and member not in buckets:
                self._members.setdefault(owner, []).append(member)
            buckets.setdefault(member, {})[key] = value

        logger.debug(
            "Defined metadata %r on %s%s",
            key, owner.__name__, f".{member}" if member else "",
        )

    def get(
        self,
        subject: Any,
        key: str,
        member: Optional[str] = None,
        default: Any = None,
    ) -> Any:
        """
        Return the stored value, or ``default`` when nothing is stored.

        Absence is not an error. Pass ``default=MISSING`` to tell a stored
        ``None`` apart from no entry at all.
        """
        owner = subject_of(subject)
        with self._lock:
            values = self._entries.get(owner, {}).get(member)
            if values is None:
                return default
            return values.get(key, default)

    def has(self, subject: Any, key: str, member: Optional[str] = None) -> bool:
        """Check whether a value is stored for the triple."""
        return self.get(subject, key, member, default=MISSING) is not MISSING

    def keys(self, subject: Any, member: Optional[str] = None) -> List[str]:
        """Metadata keys defined on a subject or member, in definition order."""
        owner = subject_of(subject)
        with self._lock:
            return list(self._entries.get(owner, {}).get(member, {}))

    def list_members(self, subject: Any) -> List[str]:
        """Members of ``subject`` carrying metadata, in declaration order."""
        owner = subject_of(subject)
        with self._lock:
            return list(self._members.get(owner, ()))

    def subjects(self) -> List[type]:
        """All subjects with at least one entry."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()
            self._members.clear()

    def __contains__(self, subject: Any) -> bool:
        with self._lock:
            return subject_of(subject) in self._entries

    def __repr__(self) -> str:
        return f"<MetadataRegistry subjects={len(self._entries)}>"
