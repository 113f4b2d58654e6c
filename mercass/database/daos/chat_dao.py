from typing import Any, Dict, List, Optional

from mercass.database.core.commands import Procedure, QueryResult, Statement
from mercass.database.core.executor import QueryExecutor
from mercass.utils.helpers import group_by


class ChatDao:
    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    async def chat_list(self, user_id) -> List[Dict[str, Any]]:
        result = await self.executor.run(Procedure("sp_getChatList", {"UserId": user_id}))
        return result.recordset

    async def new_chat(self, user_id, product_id) -> Optional[Dict[str, Any]]:
        result = await self.executor.run(Procedure("sp_NewChat", {"UserId": user_id, "ProductId": product_id}))
        return result.first()

    async def messages(self, chat_id, user_id) -> Dict[str, Any]:
        """Messages grouped by `MessageDay`, plus attachment and seller record sets."""
        result = await self.executor.run(Procedure("sp_getChatMessage", {"ChatId": chat_id, "UserId": user_id}))
        sets = result.recordsets
        return {
            "messages": group_by(sets[0] if sets else [], "MessageDay"),
            "files": sets[1] if len(sets) > 1 else [],
            "seller": sets[2] if len(sets) > 2 else [],
        }

    async def set_state(self, procedure: str, chat_id, receiver_id) -> Optional[Dict[str, Any]]:
        """Run one of `sp_ChatDel`, `sp_ChatRead`, `sp_ChatUnRead`."""
        if procedure not in ("sp_ChatDel", "sp_ChatRead", "sp_ChatUnRead"):
            raise ValueError(f"Not a chat state procedure: {procedure}")
        result = await self.executor.run(Procedure(procedure, {"ChatId": chat_id, "ReceiverId": receiver_id}))
        return result.first()

    async def answer(self, user_id, chat_id, message: str, file_link: str = "", file_name: str = "") -> QueryResult:
        return await self.executor.run(Procedure("answerChat", {
            "UserId": user_id,
            "ChatId": chat_id,
            "message": message,
            "hasfile": 1 if file_link else 0,
            "filelink": file_link,
            "fname": file_name,
        }))

    async def attach_file(self, message_id, file_name, file_link, owner_id) -> Optional[Dict[str, Any]]:
        result = await self.executor.run(Statement(
            "INSERT INTO ChatMessageFile (ChatMessageId, fname, fileLink, createdate, fileOwnerId) "
            "VALUES (?, ?, ?, GETDATE(), ?); SELECT SCOPE_IDENTITY() AS fileId",
            (message_id, file_name, file_link, owner_id),
        ))
        return result.first()

    async def mark_read(self, chat_id) -> QueryResult:
        return await self.executor.run(Statement(
            "UPDATE ChatMessage SET isread = 1 WHERE ChatId = ?; UPDATE Chat SET isread = 1 WHERE Id = ?",
            (chat_id, chat_id),
        ))
