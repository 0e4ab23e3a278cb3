"""
Tests for rebuilding reply trees from flat comment rows.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from threadbox.core.comments import (
    build_comment_tree,
    count_comment_nodes,
    flatten_comment_tree,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_rows(*specs):
    """specs: (id, parent_id) pairs, already in creation order."""
    rows = []
    for offset, (comment_id, parent_id) in enumerate(specs):
        created = BASE_TIME + timedelta(seconds=offset)
        rows.append(SimpleNamespace(
            id=comment_id,
            post_id=1,
            author_id="alice",
            content=f"comment {comment_id}",
            parent_id=parent_id,
            created_at=created,
            updated_at=created,
            likes=[],
        ))
    return rows


class TestBuildCommentTree:
    """Tests for the two-pass tree builder."""

    def test_empty_post(self):
        """A post without comments yields no roots."""
        assert build_comment_tree([]) == []

    def test_nested_chain(self):
        """A -> B -> C nests three levels deep."""
        roots = build_comment_tree(make_rows((1, None), (2, 1), (3, 2)))

        assert [r.id for r in roots] == [1]
        assert [r.id for r in roots[0].replies] == [2]
        assert [r.id for r in roots[0].replies[0].replies] == [3]
        assert roots[0].replies[0].replies[0].replies == []

    def test_replies_are_not_roots(self):
        """Replies appear under their parent and never in the root list."""
        rows = make_rows((1, None), (2, None), (3, 1), (4, 2), (5, 1))
        roots = build_comment_tree(rows)

        assert [r.id for r in roots] == [1, 2]
        assert [r.id for r in roots[0].replies] == [3, 5]
        assert [r.id for r in roots[1].replies] == [4]

    def test_creation_order_is_preserved(self):
        """Roots and sibling replies keep input order."""
        rows = make_rows((10, None), (11, 10), (12, None), (13, 10), (14, 10))
        roots = build_comment_tree(rows)

        assert [r.id for r in roots] == [10, 12]
        assert [r.id for r in roots[0].replies] == [11, 13, 14]

    def test_dangling_parent_becomes_root(self):
        """A reply whose parent is gone is kept as a root, in input order."""
        rows = make_rows((1, None), (2, 99), (3, 2))
        roots = build_comment_tree(rows)

        assert [r.id for r in roots] == [1, 2]
        assert [r.id for r in roots[1].replies] == [3]

    def test_total_count_matches_rows(self):
        """Counting every node recursively gives back the number of rows."""
        rows = make_rows((1, None), (2, 1), (3, 1), (4, 3), (5, None), (6, 5), (7, 404))
        roots = build_comment_tree(rows)

        assert count_comment_nodes(roots) == len(rows)

    def test_flatten_round_trip(self):
        """Flattening the built tree returns the same set of ids."""
        rows = make_rows((1, None), (2, 1), (3, 2), (4, None), (5, 1), (6, 4))
        flat = flatten_comment_tree(build_comment_tree(rows))

        assert {n.id for n in flat} == {r.id for r in rows}
        assert [n.id for n in flat] == [1, 2, 3, 5, 4, 6]

    def test_deep_thread(self):
        """Very deep threads are built and walked without a depth limit."""
        depth = 5000
        rows = make_rows(*[(i, i - 1 if i > 1 else None) for i in range(1, depth + 1)])
        roots = build_comment_tree(rows)

        assert len(roots) == 1
        assert count_comment_nodes(roots) == depth

    def test_node_carries_row_fields(self):
        """Nodes expose the row's fields and the derived edited flag."""
        row = make_rows((1, None))[0]
        row.updated_at = row.created_at + timedelta(minutes=5)
        row.likes = ["bob"]

        node = build_comment_tree([row])[0]

        assert node.content == "comment 1"
        assert node.author_id == "alice"
        assert node.likes == ["bob"]
        assert node.is_edited is True

    def test_self_parent_becomes_root(self):
        """A row that names itself as parent is kept as a root."""
        roots = build_comment_tree(make_rows((1, None), (2, 2), (3, 2)))

        assert [r.id for r in roots] == [1, 2]
        assert [r.id for r in roots[1].replies] == [3]
        assert count_comment_nodes(roots) == 3

    def test_parent_cycle_is_cut_at_earliest_row(self):
        """Rows that point at each other are kept, rooted at the earliest of them."""
        rows = make_rows((1, None), (2, 4), (3, 2), (4, 3), (5, 1))
        roots = build_comment_tree(rows)

        assert [r.id for r in roots] == [1, 2]
        assert [r.id for r in roots[0].replies] == [5]
        assert [r.id for r in roots[1].replies] == [3]
        assert [r.id for r in roots[1].replies[0].replies] == [4]
        assert roots[1].replies[0].replies[0].replies == []
        assert {n.id for n in flatten_comment_tree(roots)} == {r.id for r in rows}
