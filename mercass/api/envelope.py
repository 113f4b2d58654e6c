"""
One response shape for every JSON outcome.

Handlers return either raw data or an :class:`Ok`; failures become an
:class:`Err`, which always serialises as
``{"Success": 0, "ErrCode": ..., "ErrKind": ..., "ErrMessage": ...}``.
"""

from dataclasses import dataclass
from typing import Any, Optional

from fastapi.responses import JSONResponse

from mercass.exceptions import StorefrontError


@dataclass(frozen=True)
class Ok:
    data: Any = None
    message: Optional[str] = None

    def body(self) -> dict:
        body = {"Success": 1}
        if self.message is not None:
            body["Message"] = self.message
        if self.data is not None:
            body["data"] = self.data
        return body


@dataclass(frozen=True)
class Err:
    kind: str
    message: str
    code: Any = None
    status: int = 500

    @classmethod
    def from_exception(cls, exc: StorefrontError) -> "Err":
        return cls(kind=exc.kind, message=exc.message, code=exc.code, status=exc.status_code)

    def body(self) -> dict:
        return {
            "Success": 0,
            "ErrCode": self.code if self.code is not None else self.kind,
            "ErrKind": self.kind,
            "ErrMessage": self.message,
        }

    def response(self) -> JSONResponse:
        return JSONResponse(self.body(), status_code=self.status)
