"""
Session context middleware, expressed as FastAPI dependencies.

Routes compose these stages in their `dependencies` list:

- `require_session` validates the `Auth` cookie with the auth service and
  attaches the session as `request.state.user`. Anything short of a
  confirmed session raises `LoginRequired`, so later stages and the
  handler never run.
- `with_profile` and `with_user_categories` depend on the session and add
  profile rows / followed categories to the user context.
- `with_menu` attaches navigation categories and works without a session.

Request bodies are read with `read_body` (JSON or form fields) and
`read_files` (multipart uploads).
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Cookie, Depends, Request
from starlette.datastructures import UploadFile

from mercass.database.daos.profile_dao import ProfileDao
from mercass.exceptions import AuthServiceError, InvalidRequest, LoginRequired

logger = logging.getLogger(__name__)

AUTH_COOKIE = "Auth"
LOGIN_PAGE = "/userLoginandRegister"


def get_executor(request: Request):
    return request.app.state.executor


def get_settings(request: Request):
    return request.app.state.settings


def get_file_store(request: Request):
    return request.app.state.file_store


def mark_page(request: Request) -> None:
    """Flag the request as a page render so failures redirect instead of returning JSON."""
    request.state.is_page = True


async def require_session(request: Request, auth: Optional[str] = Cookie(None, alias=AUTH_COOKIE)) -> Dict[str, Any]:
    if not auth:
        raise LoginRequired("Oturum bulunamadı")
    try:
        session = await request.app.state.auth_client.check(auth)
    except AuthServiceError as e:
        raise LoginRequired(e.message) from e
    if session is None:
        raise LoginRequired("Geçersiz oturum")
    user = session.model_dump()
    request.state.user = user
    request.state.user_id = session.UsersId
    return user


async def with_profile(request: Request, user: Dict[str, Any] = Depends(require_session)) -> Dict[str, Any]:
    rows = await ProfileDao(get_executor(request)).get_profile(user["UsersId"])
    if rows:
        user["userProfile"] = rows
    return user


async def with_user_categories(request: Request, user: Dict[str, Any] = Depends(require_session)) -> Dict[str, Any]:
    rows = await ProfileDao(get_executor(request)).get_user_categories(user["UsersId"])
    if rows:
        user["userCategories"] = rows
    return user


async def with_menu(request: Request) -> Dict[str, Any]:
    rows = await ProfileDao(get_executor(request)).get_menu()
    request.state.menu_data = {"MPCategories": rows}
    return request.state.menu_data


async def read_body(request: Request) -> Dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            body = await request.json()
        except ValueError as e:
            raise InvalidRequest("Geçersiz JSON gövdesi") from e
        return body if isinstance(body, dict) else {}
    if "form" in content_type:
        form = await request.form()
        return {key: value for key, value in form.multi_items() if isinstance(value, str)}
    return {}


async def read_files(request: Request) -> List[UploadFile]:
    if "multipart/form-data" not in request.headers.get("content-type", ""):
        return []
    form = await request.form()
    return [value for _, value in form.multi_items() if isinstance(value, UploadFile) and value.filename]


# Middleware chains used by the route modules
SESSION = [Depends(require_session)]
SESSION_PROFILE = [Depends(require_session), Depends(with_profile)]
PAGE_PUBLIC = [Depends(mark_page), Depends(with_menu)]
PAGE_SESSION = [Depends(mark_page), Depends(require_session), Depends(with_menu), Depends(with_profile)]
