"""
"My account" endpoints: profile lookup, profile and password updates.

All of them act on the signed-in user; the user id always comes from the
session, never from the request body.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from mercass.api.dependencies import (
    SESSION,
    SESSION_PROFILE,
    get_executor,
    get_file_store,
    read_body,
    read_files,
    with_profile,
)
from mercass.api.envelope import Ok
from mercass.database.core.commands import Procedure
from mercass.database.core.params import parse_bool
from mercass.exceptions import InvalidRequest, NotFound, StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/GetUsersprofile")
async def get_users_profile(user: Dict[str, Any] = Depends(with_profile)):
    """
    Returns
    -------
    dict
        {'success': True, 'data': <first profile row>}

    Raises
    ------
    NotFound
        If the user has no profile row.
    """
    profile = user.get("userProfile")
    if not profile:
        raise NotFound("Kullanıcı profili bulunamadı")
    return {"success": True, "data": profile[0]}


async def _profile_images(request: Request, body: Dict[str, Any], files: List[UploadFile], user_id) -> Dict[str, str]:
    """Store the uploaded photo/background in the order the form flags them."""
    images = {"ProfilePhoto": "", "ProfileBG": ""}
    pending = list(files)
    store = get_file_store(request)
    for param, flag in (("ProfilePhoto", "isNewUploadProfile"), ("ProfileBG", "isNewUploadProfileBg")):
        if not parse_bool(body.get(flag)):
            continue
        if not pending:
            raise InvalidRequest(f"{param} için dosya bulunamadı")
        images[param] = await store.save(f"userProfile/{user_id}", pending.pop(0))
    return images


@router.post("/updatemyAccount", dependencies=SESSION_PROFILE)
async def update_my_account(request: Request, body: Dict[str, Any] = Depends(read_body),
                            files: List[UploadFile] = Depends(read_files)):
    """
    Update profile text and, optionally, the profile photo and background.

    Request Body
    ------------
    multipart {ProfileTitle, ProfileDesc, ProvinceId, isNewUploadProfile,
    isNewUploadProfileBg, file[]}
    """
    user_id = request.state.user_id
    images = await _profile_images(request, body, files, user_id)
    result = await get_executor(request).run(Procedure("sp_updateUsersProfile", {
        "userId": user_id,
        "ProfileTitle": body.get("ProfileTitle"),
        "ProfileDesc": body.get("ProfileDesc"),
        "ProvinceId": body.get("ProvinceId"),
        **images,
    }))
    return result.to_dict()


@router.post("/updateMyAccountInfo", dependencies=SESSION_PROFILE)
async def update_my_account_info(request: Request, body: Dict[str, Any] = Depends(read_body)):
    result = await get_executor(request).run(Procedure("sp_updateUsersProfileBase", {
        "UsersId": request.state.user_id,
        "IdentityNumber": body.get("IdentityNumber"),
        "ProfileName": body.get("account_first_name"),
        "ProfileSurname": body.get("account_last_name"),
        "UserName": body.get("UserName"),
        "Email": body.get("account_email"),
        "PhoneNo": body.get("UserPhone"),
    }))
    row: Optional[Dict[str, Any]] = result.first()
    if row is None:
        raise StoreError("Beklenmeyen bir hata oluştu.")
    if row.get("Success") != 1:
        raise InvalidRequest(row.get("Message") or "Bir hata oluştu.")
    return Ok(message=row.get("Message") or "Kullanıcı bilgileri başarıyla güncellendi.").body()


@router.post("/updateMyAccountPassword", dependencies=SESSION)
async def update_my_account_password(request: Request, body: Dict[str, Any] = Depends(read_body)):
    """
    Change the signed-in user's password.

    Returns
    -------
    dict
        {'ErrCode': 0, 'ErrMessage': 'Şifre başarıyla güncellendi'}

    Raises
    ------
    InvalidRequest 400
        If the confirmation differs or the new password equals the current one.
    StoreError 500
        If the store refuses the change.
    """
    new_password = body.get("account_new_password")
    current_password = body.get("account_current_password")
    if new_password != body.get("account_confirm_password"):
        raise InvalidRequest("Şifreler Uyuşmuyor", code=1)
    if current_password == new_password:
        raise InvalidRequest("Yeni Şifre eski şifre ile aynı olamaz", code=1)

    result = await get_executor(request).run(Procedure("sp_ChangePassword", {
        "UsersId": request.state.user_id,
        "newPass": new_password,
        "oldPass": current_password,
    }))
    row = result.first() or {}
    if row.get("Success") != 1:
        logger.info("Password change refused for user %s", request.state.user_id)
        raise StoreError(row.get("Message") or "Kullanıcı şifre güncellemesi yapılamadı.", code=2)
    return {"ErrCode": 0, "ErrMessage": "Şifre başarıyla güncellendi"}
