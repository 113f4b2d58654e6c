from typing import Any, Dict, List

from mercass.database.core.commands import ViewQuery
from mercass.database.core.executor import QueryExecutor


class ProfileDao:
    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    async def get_profile(self, user_id) -> List[Dict[str, Any]]:
        result = await self.executor.run(ViewQuery("v_UsersProfiles", {"usersId": user_id}))
        return result.recordset

    async def get_menu(self) -> List[Dict[str, Any]]:
        result = await self.executor.run(ViewQuery("v_MenuCategories"))
        return result.recordset

    async def get_user_categories(self, user_id) -> List[Dict[str, Any]]:
        result = await self.executor.run(ViewQuery("v_UsersCategories", {"usersId": user_id}))
        return result.recordset
