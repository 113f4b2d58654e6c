"""User administration resources."""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from mercass.api.dependencies import get_executor
from mercass.api.procedure_routes import CommandRoute, ViewRoute, register_command_routes, register_view_routes
from mercass.database.core.commands import ViewQuery
from mercass.database.core.params import Param, signature, try_parse_int

router = APIRouter()

INVALID_USER_ID = "Geçersiz kullanıcı ID"

VIEWS = [
    ViewRoute("/api/users", "v_allUsers", guarded=True),
    ViewRoute("/api/nonRegisterUsers", "v_NonRegisterUsers"),
    ViewRoute("/api/activeUsers", "v_ActiveUsers"),
    ViewRoute("/api/pendingUsers", "v_pendingUsers"),
    ViewRoute("/api/usersBlackList", "usersBlackList"),
]

COMMANDS = [
    CommandRoute("/api/usersProfileUpdate", signature(
        "sp_updateUsers",
        Param("UsersId", "UserId", kind="int", default=0),
        "IdentityNumber", "TAXNumber", "TAXOffice", "ProfileName", "ProfileSurname",
        "ProfileTitle", "ProfileDesc", "ProfilePhoto", "ProfileBG",
    )),
    CommandRoute("/api/userPasswordChange", signature(
        "sp_ChangePassword",
        Param("UsersId", "UserId", kind="int", default=0),
        Param("oldPass", "Password"),
        Param("newPass", "NewPassword"),
    )),
    CommandRoute("/api/usersCreate", signature("sp_createUsers", "Email", "UserName", "pwd", "PhoneNo")),
    CommandRoute("/api/userAccountAccept", signature(
        "sp_userAccountAccept", Param("UserId", kind="int", default=0),
    ), response="accepted"),
    CommandRoute("/api/userAccountFrezee", signature(
        "sp_userAccountFrezee", Param("UserId", kind="int", default=0),
    ), guarded=True),
    CommandRoute("/api/userAccountBlackList", signature(
        "sp_userAccountBlackList", Param("UserId", kind="int", default=0), Param("RText", "ReasonText"),
    )),
]


@router.get("/api/users/{user_id}")
async def user_detail(request: Request, user_id: str):
    """
    Returns
    -------
    list
        The `v_userDetails` rows of the user; a 500 text response when the
        id is not positive or no user matches.
    """
    user_id = try_parse_int(user_id, 0)
    if user_id <= 0:
        return PlainTextResponse(INVALID_USER_ID, status_code=500)
    result = await get_executor(request).run(ViewQuery("v_userDetails", {"Id": user_id}))
    if not result.recordset:
        return PlainTextResponse(INVALID_USER_ID, status_code=500)
    return result.recordset


register_view_routes(router, VIEWS)
register_command_routes(router, COMMANDS)
