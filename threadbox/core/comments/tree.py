"""
Threaded view of a post's comments.

Rows are stored flat with a parent_id reference; the tree is rebuilt on every
read and never persisted.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable


@dataclass
class CommentNode:
    """A comment plus its direct replies, oldest first."""
    id: int
    post_id: int
    author_id: str
    content: str
    parent_id: int | None
    created_at: datetime
    updated_at: datetime
    likes: list[str] = field(default_factory=list)
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def is_edited(self) -> bool:
        return self.updated_at != self.created_at

    @classmethod
    def from_comment(cls, comment: Any) -> "CommentNode":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            author_id=comment.author_id,
            content=comment.content,
            parent_id=comment.parent_id,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            likes=list(comment.likes or []),
        )


def build_comment_tree(comments: Iterable[Any]) -> list[CommentNode]:
    """
    Build a forest of CommentNodes from flat rows of a single post.

    Rows must already be sorted by creation time; roots and every replies list
    keep that order. A row whose parent is not among the rows (a dangling
    parent) is returned as a root so that no comment is lost.
    """
    comments = list(comments)
    comment_map: dict[int, CommentNode] = {}
    root_comments: list[CommentNode] = []

    # First pass: one node per row
    for comment in comments:
        comment_map[comment.id] = CommentNode.from_comment(comment)

    # Second pass: link children to parents in input order
    for comment in comments:
        node = comment_map[comment.id]
        parent = comment_map.get(comment.parent_id) if comment.parent_id is not None else None
        if parent is None:
            root_comments.append(node)
        else:
            parent.replies.append(node)

    # Rows caught in a parent cycle (including a row that is its own parent)
    # hang off no root; cut each cycle at its earliest row and make it a root
    reached = {node.id for node in flatten_comment_tree(root_comments)}
    if len(reached) < len(comment_map):
        for comment in comments:
            if comment.id in reached:
                continue
            node = comment_map[comment.id]
            parent = comment_map[comment.parent_id]
            parent.replies = [reply for reply in parent.replies if reply is not node]
            root_comments.append(node)
            reached.update(n.id for n in flatten_comment_tree([node]))

        position = {comment.id: index for index, comment in enumerate(comments)}
        root_comments.sort(key=lambda root: position[root.id])

    return root_comments


def flatten_comment_tree(roots: Iterable[CommentNode]) -> list[CommentNode]:
    """Depth-first, pre-order listing of every node in the forest."""
    flat: list[CommentNode] = []
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.replies))
    return flat


def count_comment_nodes(roots: Iterable[CommentNode]) -> int:
    return len(flatten_comment_tree(roots))
