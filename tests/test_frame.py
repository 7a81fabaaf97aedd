"""
Tests for traversal frames.
"""

from relay_walker import Frame, TraversalQueue


class TestDiscoveredGids:
    """Test GID extraction from results."""

    def test_depth_first_encounter_order(self):
        """Test the documented extraction example."""
        frame = Frame(None, "A")
        frame.result = {
            "id": "A",
            "child": {"id": "B"},
            "list": [{"id": "C"}, {"id": "D"}],
        }
        assert frame.discovered_gids() == ["A", "B", "C", "D"]

    def test_walker_query_response(self):
        """Test a connection-shaped result with aliased keys."""
        frame = Frame(None, "P1")
        frame.result = {
            "node": {
                "id": "P1",
                "qwertyuiopas": {
                    "zxcvbnmlkjhg": [
                        {"node": {"id": "P2"}},
                        {"node": {"id": "P3"}},
                    ]
                },
                "asdfghjklqwe": {"id": "P4"},
            }
        }
        assert frame.discovered_gids() == ["P1", "P2", "P3", "P4"]

    def test_duplicates_are_kept(self):
        """Test dedup is left to the queue."""
        frame = Frame(None, "A")
        assert frame.discovered_gids([{"id": "X"}, {"id": "X"}]) == ["X", "X"]

    def test_sequence_under_id_is_flattened(self):
        """Test list-valued ids."""
        frame = Frame(None, "A")
        assert frame.discovered_gids({"id": ["X", "Y"]}) == ["X", "Y"]

    def test_non_string_ids_are_coerced(self):
        """Test integer ids become strings."""
        frame = Frame(None, "A")
        assert frame.discovered_gids({"id": 42, "other": {"id": 7}}) == ["42", "7"]

    def test_null_ids_and_scalars(self):
        """Test null ids and scalar results contribute nothing."""
        frame = Frame(None, "A")
        assert frame.discovered_gids({"id": None, "name": "x"}) == []
        assert frame.discovered_gids("just a string") == []
        assert frame.discovered_gids(12) == []

    def test_empty_result(self):
        """Test frames without a result."""
        frame = Frame(None, "A")
        assert frame.discovered_gids() == []
        frame.result = {}
        assert frame.discovered_gids() == []


class TestFrameProvenance:
    """Test parent links."""

    def test_child(self):
        """Test child frames point at their parent and queue."""
        queue = TraversalQueue()
        parent = Frame(queue, "A")
        child = parent.child("B")

        assert child.gid == "B"
        assert child.parent is parent
        assert child.queue is queue
        assert child.result is None
        assert child.context == {}

    def test_depth_and_path(self):
        """Test depth counts hops from the root."""
        root = Frame(None, "A")
        grandchild = root.child("B").child("C")

        assert root.depth == 0
        assert grandchild.depth == 2
        assert grandchild.path() == ["A", "B", "C"]


class TestEnqueueDiscovered:
    """Test offering discovered GIDs."""

    def test_enqueue_discovered(self):
        """Test children are offered and rejections ignored."""
        queue = TraversalQueue()
        queue.offer_gid("A")
        frame = next(queue.drain())
        frame.result = {"id": "A", "friends": [{"id": "B"}, {"id": "C"}, {"id": "B"}]}

        assert frame.enqueue_discovered() == 2
        pending = queue.frames
        assert [f.gid for f in pending] == ["B", "C"]
        assert all(f.parent is frame for f in pending)

    def test_enqueue_respects_max_size(self):
        """Test overflow is silent."""
        queue = TraversalQueue(max_size=1)
        frame = Frame(queue, "root")
        frame.result = {"a": {"id": "X"}, "b": {"id": "Y"}}

        assert frame.enqueue_discovered() == 1
        assert len(queue) == 1
