"""User and health routes.

Handlers are thin: parse the transport shape, call :class:`UserService`,
and map the :class:`ServiceResult` onto a status code and JSON body.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status
from fastapi.responses import JSONResponse

from userapi.domain.errors import ErrorKind
from userapi.domain.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from userapi.domain.users import UserRequest
from userapi.services.result import ServiceResult
from userapi.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])
health_router = APIRouter(tags=["System"])

# Ids outside signed 64-bit range are malformed, not missing.
UserId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def error_response(result: ServiceResult, fallback: str) -> JSONResponse:
    """Render a failed result as ``{"error": ...}`` with the mapped status.

    Persistence details stay in the logs; clients get *fallback*.
    """
    if result.error is None:
        msg = "error_response requires a failed result"
        raise ValueError(msg)
    code = _STATUS_BY_KIND[result.error.code]
    message = fallback if result.error.code == ErrorKind.PERSISTENCE else result.error.message
    return JSONResponse(status_code=code, content={"error": message})


def _query_int(raw: str | None, default: int) -> int:
    """Positive integer query value, or *default* when missing or unusable."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@health_router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserRequest, service: UserService = Depends(get_user_service)
) -> Response:
    result = service.create_user(payload)
    if not result.ok:
        return error_response(result, "Failed to create user")
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=result.data)


@router.get("")
def list_users(
    page: str | None = None,
    page_size: str | None = None,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Paginated envelope when ``page`` or ``page_size`` is given, bare list otherwise."""
    if page or page_size:
        result = service.list_users_paged(
            _query_int(page, DEFAULT_PAGE),
            _query_int(page_size, DEFAULT_PAGE_SIZE),
        )
        if not result.ok:
            return error_response(result, "Failed to get users")
        return JSONResponse(content=result.data)

    result = service.list_users_simple()
    if not result.ok:
        return error_response(result, "Failed to get users")
    return JSONResponse(content=result.data["users"])


@router.get("/{user_id}")
def get_user(user_id: UserId, service: UserService = Depends(get_user_service)) -> Response:
    result = service.get_user(user_id)
    if not result.ok:
        return error_response(result, "Failed to get user")
    return JSONResponse(content=result.data)


@router.put("/{user_id}")
def update_user(
    user_id: UserId,
    payload: UserRequest,
    service: UserService = Depends(get_user_service),
) -> Response:
    result = service.update_user(user_id, payload)
    if not result.ok:
        return error_response(result, "Failed to update user")
    return JSONResponse(content=result.data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UserId, service: UserService = Depends(get_user_service)
) -> Response:
    result = service.delete_user(user_id)
    if not result.ok:
        return error_response(result, "Failed to delete user")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
