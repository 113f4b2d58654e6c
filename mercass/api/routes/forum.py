"""
Forum posts, drafts, likes, comments and images.

A user has at most one draft post. Images for it are uploaded to
`ForumResimler/<userId>/`; publishing moves them to `ForumPost/<userId>/`
and deleting the draft removes them.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request

from mercass.api.dependencies import get_executor, get_file_store, read_body
from mercass.api.procedure_routes import CommandRoute, register_command_routes
from mercass.database.core.commands import Procedure, ViewQuery
from mercass.database.core.params import Param, constant, signature

logger = logging.getLogger(__name__)

router = APIRouter()

FORUM_PAGE_SIZE = 5
DRAFT_FOLDER = "ForumResimler"
POST_FOLDER = "ForumPost"

COMMANDS = [
    CommandRoute("/GetForumPost", signature(
        "sp_getFormPost2", Param("UserId", "userId"), Param("f", "first"), constant("l", FORUM_PAGE_SIZE),
    ), response="recordsets"),
    CommandRoute("/GetDraftForumPost", signature(
        "sp_getDraftFormPost", Param("UserId", "userId"),
    ), response="recordsets"),
    CommandRoute("/UpdateDraftForumPost", signature(
        "sp_createDraft_ForumPost",
        Param("userId", "UserId"), Param("categoryId", "postCategoryId"), Param("contentText", "postDesc"),
        constant("image", ""),
    )),
    CommandRoute("/forumAddLike", signature("sp_forumAddLike", "forumId", "userId")),
    CommandRoute("/forumRemoveLike", signature("sp_forumRemoveLike", "forumId", "userId")),
    CommandRoute("/forumCommentAdd", signature("sp_forumAddComment", "forumId", "userId", "commentText")),
    CommandRoute("/sp_deleteForumComment", signature("sp_deleteForumComment", "forumCommentId")),
    CommandRoute("/api/createForumPost", signature(
        "sp_createForumPost",
        "userId", "categoryId", Param("provinceId", default=0), "contentText",
        Param("imageList", kind="json", default="[]"),
    )),
    CommandRoute("/api/deleteForum", signature("sp_deleteForum", "forumId")),
    CommandRoute("/api/deleteForumComment", signature("sp_deleteForumComment", "forumCommentId")),
    CommandRoute("/api/deleteForumImg", signature("sp_deleteForumImg", "forumImgId")),
    CommandRoute("/api/forumAddLike", signature("sp_forumAddLike", "forumId", "userId")),
    CommandRoute("/api/forumRemoveLike", signature("sp_forumRemoveLike", "forumId", "userId")),
]


@router.post("/deleteDraftForumPostImage")
async def delete_draft_image(request: Request, body: Dict[str, Any] = Depends(read_body)):
    """Remove one image from the draft and its file; answers with the image id."""
    image_id = body.get("ImgID")
    result = await get_executor(request).run(
        Procedure("sp_deleteDraft_ForumImage", {"D_forumImage_ID": image_id})
    )
    row = result.first()
    if row and row.get("IMGUrl"):
        await get_file_store(request).delete(row["IMGUrl"])
    return image_id


async def _draft_files(request: Request, user_id) -> list:
    return await get_file_store(request).list(f"{DRAFT_FOLDER}/{user_id}")


@router.post("/deleteDraftForumPost")
async def delete_draft(request: Request, body: Dict[str, Any] = Depends(read_body)):
    user_id = body.get("userId")
    store = get_file_store(request)
    for name in await _draft_files(request, user_id):
        await store.delete(f"{DRAFT_FOLDER}/{user_id}/{name}")
    result = await get_executor(request).run(Procedure("sp_deleteDraft_Forum", {"UserId": user_id}))
    return result.to_dict()


@router.post("/CrateForumPost")
async def publish_draft(request: Request, body: Dict[str, Any] = Depends(read_body)):
    """Publish the user's draft, moving its images to the post folder first."""
    user_id = body.get("userId")
    store = get_file_store(request)
    for name in await _draft_files(request, user_id):
        await store.move(f"{DRAFT_FOLDER}/{user_id}/{name}", f"{POST_FOLDER}/{user_id}/{name}")
    result = await get_executor(request).run(Procedure("sp_createForumPost", {"UserId": user_id}))
    logger.info("Forum draft of user %s published", user_id)
    return result.to_dict()


@router.get("/api/forum")
async def forum_posts(request: Request, uCatsId: Optional[str] = None):
    result = await get_executor(request).run(Procedure("sp_getFormPost", {"cIds": uCatsId}))
    return result.recordsets


@router.post("/api/forumComments/{forum_id}")
async def forum_comments(request: Request, forum_id: str):
    result = await get_executor(request).run(ViewQuery("v_forumComment", {"forumId": forum_id}))
    return result.recordset


@router.post("/api/forumImages/{forum_id}")
async def forum_images(request: Request, forum_id: str):
    result = await get_executor(request).run(ViewQuery("v_forumImages", {"forumId": forum_id}))
    return result.recordset


register_command_routes(router, COMMANDS)
