"""
Login, logout and one-time-password endpoints.

Credentials never reach the store: they are wrapped with the device
fingerprint and forwarded to the auth service, whose `Auth` token is then
stored in the `Auth` cookie.
"""

import logging
from typing import Any, Dict
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from mercass.api.dependencies import AUTH_COOKIE, LOGIN_PAGE, PAGE_PUBLIC, get_executor, get_settings, read_body
from mercass.api.device import build_login_payload
from mercass.api.envelope import Err
from mercass.api.rendering import render
from mercass.database.core.commands import Procedure
from mercass.exceptions import AuthServiceError
from mercass.utils.helpers import valid_email

logger = logging.getLogger(__name__)

router = APIRouter()


def login_error_url(code: Any, message: Any = None) -> str:
    query = {"ErrC": code}
    if message is not None:
        query["ErrM"] = message
    return LOGIN_PAGE + "?" + urlencode(query, quote_via=quote)


def set_auth_cookie(response, token: str, settings) -> None:
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def _login_payload(request: Request, body: Dict[str, Any]):
    identifier = body.get("login_email") or ""
    logger.info("Login attempt by %s", "email" if valid_email(identifier) else "user name")
    client_ip = request.client.host if request.client else ""
    return build_login_payload(identifier, body.get("login_password") or "",
                               request.headers.get("user-agent", ""), client_ip)


@router.get("/login", dependencies=PAGE_PUBLIC)
async def login_page(request: Request):
    return render(request, "login")


@router.post("/login")
async def login(request: Request, body: Dict[str, Any] = Depends(read_body)):
    """
    Open a session through the auth service.

    Request Body
    ------------
    form {login_email: str, login_password: str}

    Returns
    -------
    RedirectResponse
        303 to `/` with the `Auth` cookie set, or 303 back to the login
        page with `ErrC`/`ErrM` describing the failure.
    """
    payload = _login_payload(request, body)
    try:
        answer = await request.app.state.auth_client.authenticate(payload)
    except AuthServiceError as e:
        return RedirectResponse(login_error_url(e.kind, e.message), status_code=303)
    if answer.is_error:
        return RedirectResponse(login_error_url(answer.ErrCode, answer.ErrMessage), status_code=303)
    response = RedirectResponse("/", status_code=303)
    set_auth_cookie(response, answer.Auth, get_settings(request))
    return response


@router.post("/loginAXAJ")
async def login_ajax(request: Request, body: Dict[str, Any] = Depends(read_body)):
    """
    Same as `/login` for script clients.

    Returns
    -------
    dict
        The auth service body as is. The cookie is only set when it carries no `ErrCode`.
    """
    payload = _login_payload(request, body)
    try:
        answer = await request.app.state.auth_client.authenticate(payload)
    except AuthServiceError as e:
        response = Err.from_exception(e).response()
        response.delete_cookie(AUTH_COOKIE)
        return response
    response = JSONResponse(answer.model_dump(exclude_none=True))
    if not answer.is_error:
        set_auth_cookie(response, answer.Auth, get_settings(request))
    return response


@router.get("/logout")
async def logout():
    response = RedirectResponse(login_error_url("exit"), status_code=303)
    response.delete_cookie(AUTH_COOKIE)
    return response


@router.get("/userLoginandRegister", dependencies=PAGE_PUBLIC)
@router.post("/userLoginandRegister", dependencies=PAGE_PUBLIC)
async def login_and_register(request: Request):
    data = {"MPCategories": request.state.menu_data.get("MPCategories", [])}
    return render(request, "userLoginAndRegister", data)


@router.post("/api/createOTP")
async def create_otp(request: Request, body: Dict[str, Any] = Depends(read_body)):
    result = await get_executor(request).run(Procedure("createOTP", {"phone": body.get("Tel")}))
    return result.to_dict()


@router.post("/api/validOTP")
async def valid_otp(request: Request, body: Dict[str, Any] = Depends(read_body)):
    result = await get_executor(request).run(
        Procedure("validOTP", {"phone": body.get("telefon"), "code": body.get("SMSCode")})
    )
    row = result.first() or {}
    return {"istelvalid": row.get("is_valid") == 1}
