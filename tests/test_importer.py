"""
Tests for ReplyCollector.
"""

import itertools

import pytest

from km_rdf_import.importer import Reply, ReplyCollector, ReplyType, path_key


@pytest.fixture
def collector():
    counter = itertools.count(1)
    return ReplyCollector(id_factory=lambda: f"item-{next(counter)}")


class TestPathKey:
    """Tests for path_key()."""

    def test_dotted(self):
        assert path_key(["ch1", "q1", "item-1", "q2"]) == "ch1.q1.item-1.q2"

    def test_empty_path(self):
        """Test an empty path is rejected."""
        with pytest.raises(ValueError):
            path_key([])


class TestReplyCollector:
    """Tests for the in-memory reply sink."""

    def test_add_item_appends_to_item_list(self, collector):
        """Test items accumulate under the list question path."""
        assert collector.add_item(["ch1", "q1"]) == "item-1"
        assert collector.add_item(["ch1", "q1"]) == "item-2"

        reply = collector.get(["ch1", "q1"])
        assert reply == Reply(ReplyType.ITEM_LIST, ["item-1", "item-2"])

    def test_default_ids_are_unique(self):
        """Test generated ids differ."""
        collector = ReplyCollector()
        assert collector.add_item(["q"]) != collector.add_item(["q"])

    def test_set_reply_infers_type(self, collector):
        """Test strings and sequences map to string and multi-choice replies."""
        collector.set_reply(["ch1", "q1"], "Alice")
        collector.set_reply(["ch1", "q2"], ("c1", "c2"))

        assert collector.get(["ch1", "q1"]) == Reply(ReplyType.STRING, "Alice")
        assert collector.get(["ch1", "q2"]) == Reply(ReplyType.MULTI_CHOICE, ["c1", "c2"])

    def test_set_reply_explicit_type(self, collector):
        """Test an explicit reply type is kept."""
        collector.set_reply(["ch1", "q1"], "a2", reply_type=ReplyType.ANSWER)
        assert collector.get(["ch1", "q1"]).reply_type is ReplyType.ANSWER

    def test_get_missing(self, collector):
        assert collector.get(["nope"]) is None

    def test_to_dict(self, collector):
        """Test serialization to the host reply JSON."""
        collector.add_item(["ch1", "q1"])
        collector.set_reply(["ch1", "q1", "item-1", "q2"], "Alice")

        assert collector.to_dict() == {
            "ch1.q1": {"value": {"type": "ItemListReply", "value": ["item-1"]}},
            "ch1.q1.item-1.q2": {"value": {"type": "StringReply", "value": "Alice"}},
        }
        assert len(collector) == 2

    def test_to_text(self, collector):
        """Test the text listing names paths and values."""
        collector.set_reply(["ch1", "q1"], "Alice")
        text = collector.to_text()
        assert "ch1.q1" in text
        assert "StringReply: 'Alice'" in text

    def test_to_text_empty(self, collector):
        assert collector.to_text() == "(no replies)"
