"""
Buyer/seller chat.

Every chat is about one product. Messages come back grouped by the day
they were sent, with attachments and the seller card alongside.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from mercass.api.dependencies import SESSION, get_executor, get_file_store, read_body, read_files
from mercass.database.daos.chat_dao import ChatDao

router = APIRouter()


def _dao(request: Request) -> ChatDao:
    return ChatDao(get_executor(request))


@router.post("/GetChatMessages", dependencies=SESSION)
async def get_chat_messages(request: Request, body: Dict[str, Any] = Depends(read_body)):
    """
    Returns
    -------
    dict
        {'messages': {<MessageDay>: [rows]}, 'files': [rows], 'seller': [rows]}
    """
    return await _dao(request).messages(body.get("chatId"), request.state.user_id)


@router.post("/ChatDel", dependencies=SESSION)
async def chat_delete(request: Request, body: Dict[str, Any] = Depends(read_body)):
    return await _dao(request).set_state("sp_ChatDel", body.get("chatId"), request.state.user_id)


@router.post("/ChatRead", dependencies=SESSION)
async def chat_read(request: Request, body: Dict[str, Any] = Depends(read_body)):
    return await _dao(request).set_state("sp_ChatRead", body.get("chatId"), request.state.user_id)


@router.post("/ChatUnRead", dependencies=SESSION)
async def chat_unread(request: Request, body: Dict[str, Any] = Depends(read_body)):
    return await _dao(request).set_state("sp_ChatUnRead", body.get("chatId"), request.state.user_id)


@router.post("/AnswerChat")
async def answer_chat(request: Request, body: Dict[str, Any] = Depends(read_body),
                      files: List[UploadFile] = Depends(read_files)):
    """
    Post a message, optionally with one file stored under `chat/<chatId>/`.

    Request Body
    ------------
    form or JSON {UserId, chatId, message} plus an optional multipart file
    """
    chat_id = body.get("chatId")
    link, name = "", ""
    if files:
        link = await get_file_store(request).save(f"chat/{chat_id}", files[0])
        name = files[0].filename
    result = await _dao(request).answer(body.get("UserId"), chat_id, body.get("message"), link, name)
    return result.to_dict()


@router.post("/newChat", dependencies=SESSION)
async def new_chat(request: Request, body: Dict[str, Any] = Depends(read_body)):
    return await _dao(request).new_chat(request.state.user_id, body.get("productId"))


@router.post("/AttachFileToMessage")
async def attach_file_to_message(request: Request, body: Dict[str, Any] = Depends(read_body)):
    row = await _dao(request).attach_file(
        body.get("chatMessageId"), body.get("fileName"), body.get("fileLink"), body.get("fileOwnerId"),
    )
    return {"fileId": (row or {}).get("fileId")}


@router.post("/MarkMessagesAsRead")
async def mark_messages_as_read(request: Request, body: Dict[str, Any] = Depends(read_body)):
    await _dao(request).mark_read(body.get("chatId"))
    return {"success": True}
