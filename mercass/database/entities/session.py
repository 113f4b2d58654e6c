from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict


class LoginPayload(BaseModel):
    """Session fingerprint posted to the auth service's `/auth` endpoint."""

    UserName: str
    pwd: str
    UA: str
    IsMobile: int
    BrowserName: str
    Os: str
    Auth: str
    ValidHash: str
    connectionIp: str
    Devices: str


class AuthResponse(BaseModel):
    """Body returned by `/auth` and `/check`.

    A populated `ErrCode` marks a rejected request; anything the service
    adds beyond the known fields is kept.
    """

    model_config = ConfigDict(extra="allow")

    Auth: Optional[str] = None
    UsersId: Optional[Union[int, str]] = None
    ErrCode: Optional[Any] = None
    ErrMessage: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return bool(self.ErrCode)


class SessionInfo(BaseModel):
    """Validated session attached to the request as its user context."""

    model_config = ConfigDict(extra="allow")

    Auth: str
    UsersId: Union[int, str]
    UserName: Optional[str] = None
    BrowserName: Optional[str] = None
    Os: Optional[str] = None
    Devices: Optional[str] = None
    IsMobile: Optional[int] = None
    connectionIp: Optional[str] = None
    ValidHash: Optional[str] = None
