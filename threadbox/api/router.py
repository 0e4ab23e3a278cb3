from fastapi import APIRouter
from threadbox.api.v0.post.main import router as post_router
from threadbox.api.v0.comment.main import router as comment_router

router = APIRouter(prefix="/api")
router.include_router(post_router)
router.include_router(comment_router)
