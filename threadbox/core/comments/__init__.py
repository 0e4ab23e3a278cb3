"""
Hierarchical comment engine.

Stores flat, parent-referencing comment rows, rebuilds them into reply trees,
and cascades deletes through whole threads.
"""
from threadbox.core.comments.errors import (
    CommentError,
    InvalidContentError,
    ParentNotFoundError,
    ParentPostMismatchError,
    CommentNotFoundError,
    ForbiddenError,
    CascadeDeletionFailedError,
)
from threadbox.core.comments.store import CommentStore, NewComment
from threadbox.core.comments.tree import (
    CommentNode,
    build_comment_tree,
    flatten_comment_tree,
    count_comment_nodes,
)
from threadbox.core.comments.service import (
    CommentAction,
    validate_new_comment,
    authorize_comment_action,
    create_comment,
    list_comments_for_post,
    update_comment,
    delete_comment,
    delete_with_replies,
    delete_all_for_post,
)

__all__ = [
    "CommentError",
    "InvalidContentError",
    "ParentNotFoundError",
    "ParentPostMismatchError",
    "CommentNotFoundError",
    "ForbiddenError",
    "CascadeDeletionFailedError",
    "CommentStore",
    "NewComment",
    "CommentNode",
    "build_comment_tree",
    "flatten_comment_tree",
    "count_comment_nodes",
    "CommentAction",
    "validate_new_comment",
    "authorize_comment_action",
    "create_comment",
    "list_comments_for_post",
    "update_comment",
    "delete_comment",
    "delete_with_replies",
    "delete_all_for_post",
]
