"""
Reply Sink - where the crawler records items and replies.

ReplyCollector keeps replies in memory in the shape the host application
stores them: keyed by the dotted path string, each value tagged with its
reply type.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol


class ReplySink(Protocol):
    def add_item(self, path: list[str]) -> str:
        ...

    def set_reply(self, path: list[str], value: Any, reply_type: "ReplyType | None" = None) -> None:
        ...


class ReplyType(Enum):
    """Reply value shapes understood by the host."""
    STRING = "StringReply"
    ANSWER = "AnswerReply"
    MULTI_CHOICE = "MultiChoiceReply"
    ITEM_LIST = "ItemListReply"


@dataclass
class Reply:
    """A reply value recorded at a path."""
    reply_type: ReplyType
    value: Any

    def to_dict(self) -> dict:
        return {"value": {"type": self.reply_type.value, "value": self.value}}


def path_key(path: list[str]) -> str:
    """Dotted key for a reply path."""
    if not path:
        raise ValueError("path must contain at least one segment")
    return ".".join(path)


def _infer_reply(value: Any) -> Reply:
    if isinstance(value, (list, tuple)):
        return Reply(ReplyType.MULTI_CHOICE, list(value))
    return Reply(ReplyType.STRING, str(value))


class ReplyCollector:
    """
    In-memory ReplySink.

    ``add_item`` appends a new item id to the item list at ``path``;
    ``set_reply`` stores a value, inferring string or multi-choice from its
    shape unless ``reply_type`` is given.
    """

    def __init__(self, id_factory: Callable[[], str] | None = None):
        """
        Initialize the collector.

        Args:
            id_factory: Callable producing new item ids (uuid4 by default)
        """
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self.replies: dict[str, Reply] = {}

    def __len__(self) -> int:
        return len(self.replies)

    def add_item(self, path: list[str]) -> str:
        key = path_key(path)
        item_uuid = self._new_id()

        reply = self.replies.get(key)
        if reply is None or reply.reply_type is not ReplyType.ITEM_LIST:
            reply = Reply(ReplyType.ITEM_LIST, [])
            self.replies[key] = reply
        reply.value.append(item_uuid)

        return item_uuid

    def set_reply(self, path: list[str], value: Any, reply_type: ReplyType | None = None) -> None:
        key = path_key(path)
        if reply_type is None:
            self.replies[key] = _infer_reply(value)
        else:
            self.replies[key] = Reply(reply_type, value)

    def get(self, path: list[str]) -> Reply | None:
        return self.replies.get(path_key(path))

    def to_dict(self) -> dict[str, dict]:
        """Serialize to the host reply JSON."""
        return {key: reply.to_dict() for key, reply in self.replies.items()}

    def to_text(self) -> str:
        """Human-readable reply listing."""
        if not self.replies:
            return "(no replies)"

        lines = []
        for key, reply in self.replies.items():
            if isinstance(reply.value, list):
                value_str = ", ".join(str(v) for v in reply.value) or "(empty)"
            else:
                value_str = repr(reply.value)
            lines.append(f"{key}")
            lines.append(f"    {reply.reply_type.value}: {value_str}")
        return "\n".join(lines)
