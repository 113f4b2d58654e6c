"""
Table-driven registration of the two most common route recipes.

- `CommandRoute`: POST body → parameter list → one stored procedure.
- `ViewRoute`: GET → one view read → rows as JSON.

Each table entry becomes a regular FastAPI route, so the table is the
whole dispatch logic; nothing is resolved at request time.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence, Tuple

from fastapi import APIRouter, Depends, Request

from mercass.api.dependencies import SESSION, get_executor, read_body
from mercass.database.core.commands import QueryResult, ViewQuery
from mercass.database.core.params import ProcedureSignature

logger = logging.getLogger(__name__)

ACCEPTED = {"Status": "OK", "Message": "Güncelleme Yapıldı"}


def shape_raw(result: QueryResult) -> Any:
    return result.to_dict()


def shape_recordsets(result: QueryResult) -> Any:
    return result.recordsets


def shape_accepted(result: QueryResult) -> Any:
    return dict(ACCEPTED) if any(result.rows_affected) else {}


SHAPES = {
    "raw": shape_raw,
    "recordsets": shape_recordsets,
    "accepted": shape_accepted,
}


@dataclass(frozen=True)
class CommandRoute:
    """
    Attributes
    ----------
    path : str
        Route path.
    signature : ProcedureSignature
        Procedure and its declared parameters.
    session_params : tuple of str
        Parameters filled with the session's user id instead of the body.
    guarded : bool
        Whether the route requires a valid session.
    response : str
        How the result is returned: ``raw``, ``recordsets`` or ``accepted``.
    """

    path: str
    signature: ProcedureSignature
    session_params: Tuple[str, ...] = ()
    guarded: bool = False
    response: str = "raw"


@dataclass(frozen=True)
class ViewRoute:
    path: str
    view: str
    order_by: Sequence[str] = ()
    guarded: bool = False


def _command_endpoint(route: CommandRoute):
    shape = SHAPES[route.response]

    async def endpoint(request: Request, body: Dict[str, Any] = Depends(read_body)):
        extra = {name: request.state.user_id for name in route.session_params}
        command = route.signature.command(body, extra)
        result = await get_executor(request).run(command)
        logger.info("%s executed", route.signature.name, extra={"extra": {"path": route.path}})
        return shape(result)

    endpoint.__name__ = "command_" + route.signature.name
    return endpoint


def _view_endpoint(route: ViewRoute):
    async def endpoint(request: Request):
        result = await get_executor(request).run(ViewQuery(route.view, order_by=route.order_by))
        return result.recordset

    endpoint.__name__ = "view_" + route.view
    return endpoint


def register_command_routes(router: APIRouter, routes: Iterable[CommandRoute]) -> None:
    for route in routes:
        if route.session_params and not route.guarded:
            raise ValueError(f"{route.path}: session parameters need a guarded route")
        router.add_api_route(
            route.path,
            _command_endpoint(route),
            methods=["POST"],
            dependencies=list(SESSION) if route.guarded else None,
        )


def register_view_routes(router: APIRouter, routes: Iterable[ViewRoute]) -> None:
    for route in routes:
        router.add_api_route(
            route.path,
            _view_endpoint(route),
            methods=["GET"],
            dependencies=list(SESSION) if route.guarded else None,
        )
