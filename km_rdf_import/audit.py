"""
Crawl Audit - record of everything a crawl did and skipped.

Skips are expected outcomes (missing annotations, unmatched values) and are
never reported to the caller of a crawl; they land here instead so a
session summary can show why a question stayed empty.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class CrawlEventKind(Enum):
    """What happened at a path."""
    ITEM_CREATED = "item_created"
    REPLY_SET = "reply_set"
    SKIPPED = "skipped"


class SkipReason(Enum):
    MISSING_REFERENCE = "missing-reference"
    MISSING_ANNOTATION = "missing-annotation"
    MISSING_SUBJECT = "missing-subject"
    NO_MATCH = "no-match"


@dataclass
class CrawlEvent:
    """A single crawl step."""
    timestamp: datetime
    kind: CrawlEventKind
    path: list[str]
    detail: Any = None
    reason: SkipReason | None = None

    def __str__(self) -> str:
        path_str = ".".join(self.path) if self.path else "(root)"
        if self.kind is CrawlEventKind.SKIPPED:
            return f"[SKIPPED] {path_str}: {self.reason.value if self.reason else 'unknown'}"
        if self.kind is CrawlEventKind.ITEM_CREATED:
            return f"[ITEM] {path_str} -> {self.detail}"
        return f"[REPLY] {path_str} = {self.detail!r}"


@dataclass
class CrawlAudit:
    """
    Thread-safe audit log of crawl events.

    Appending is the only mutation, so independent crawl branches may
    share one log.
    """
    events: list[CrawlEvent] = field(default_factory=list)

    def __post_init__(self):
        self._lock = threading.Lock()

    def log(
        self,
        kind: CrawlEventKind,
        path: list[str],
        detail: Any = None,
        reason: SkipReason | None = None,
    ) -> None:
        """Log a crawl event."""
        with self._lock:
            self.events.append(CrawlEvent(
                timestamp=datetime.now(),
                kind=kind,
                path=list(path),
                detail=detail,
                reason=reason,
            ))

    def item_created(self, path: list[str], item_uuid: str) -> None:
        self.log(CrawlEventKind.ITEM_CREATED, path, item_uuid)

    def reply_set(self, path: list[str], value: Any) -> None:
        self.log(CrawlEventKind.REPLY_SET, path, value)

    def skipped(self, path: list[str], reason: SkipReason) -> None:
        self.log(CrawlEventKind.SKIPPED, path, reason=reason)

    def get_summary(self) -> dict:
        """Get summary statistics."""
        with self._lock:
            items = sum(1 for e in self.events if e.kind is CrawlEventKind.ITEM_CREATED)
            replies = sum(1 for e in self.events if e.kind is CrawlEventKind.REPLY_SET)
            skips = [e.reason for e in self.events if e.kind is CrawlEventKind.SKIPPED]

            return {
                "total": len(self.events),
                "items": items,
                "replies": replies,
                "skipped": len(skips),
                "skip_reasons": {
                    reason.value: skips.count(reason) for reason in SkipReason if reason in skips
                },
            }

    def clear(self) -> None:
        """Clear all events."""
        with self._lock:
            self.events.clear()


# Global audit log
_audit_log = CrawlAudit()


def get_audit_log() -> CrawlAudit:
    """Get the global audit log."""
    return _audit_log
