"""UserService — validated CRUD over the users table.

Pipeline per write: VALIDATE → PERSIST → RESPOND. Reads derive ``age``
from the stored date of birth; writes echo the request without it.
"""

from __future__ import annotations

from userapi.domain.errors import ErrorKind, NotFoundError, PersistenceError
from userapi.domain.pagination import SIMPLE_LIST_LIMIT, PageRequest, total_pages
from userapi.domain.users import UserListResponse, UserRequest, UserResponse
from userapi.services.base import BaseService
from userapi.services.result import ServiceResult


class UserService(BaseService):
    """Create, read, list, update, and delete users."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_user(self, request: UserRequest) -> ServiceResult:
        op = "create_user"
        invalid = self._validate(op, request)
        if invalid is not None:
            return invalid

        try:
            user_id = self._repo.insert(request.name, request.date_of_birth)
        except PersistenceError as exc:
            return self._persistence_failure(op, exc)

        self._log.info("user_created", user_id=user_id)
        response = UserResponse(id=user_id, name=request.name, date_of_birth=request.date_of_birth)
        return ServiceResult.success(op, response.to_data())

    def update_user(self, user_id: int, request: UserRequest) -> ServiceResult:
        """Replace name and date of birth of an existing user.

        The response mirrors :meth:`create_user` and carries no ``age``.
        """
        op = "update_user"
        invalid = self._validate(op, request)
        if invalid is not None:
            return invalid

        try:
            self._repo.update(user_id, request.name, request.date_of_birth)
        except NotFoundError as exc:
            return self._not_found(op, exc)
        except PersistenceError as exc:
            return self._persistence_failure(op, exc)

        self._log.info("user_updated", user_id=user_id)
        response = UserResponse(id=user_id, name=request.name, date_of_birth=request.date_of_birth)
        return ServiceResult.success(op, response.to_data())

    def delete_user(self, user_id: int) -> ServiceResult:
        op = "delete_user"
        try:
            self._repo.delete(user_id)
        except NotFoundError as exc:
            return self._not_found(op, exc)
        except PersistenceError as exc:
            return self._persistence_failure(op, exc)

        self._log.info("user_deleted", user_id=user_id)
        return ServiceResult.success(op, {"id": user_id})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_user(self, user_id: int) -> ServiceResult:
        op = "get_user"
        try:
            record = self._repo.find_by_id(user_id)
        except NotFoundError as exc:
            return self._not_found(op, exc)
        except PersistenceError as exc:
            return self._persistence_failure(op, exc)

        response = UserResponse.from_record(record, today=self._clock())
        return ServiceResult.success(op, response.to_data())

    def list_users_simple(self) -> ServiceResult:
        """All users (up to ``SIMPLE_LIST_LIMIT``) with ages, no envelope.

        Rows past the limit are silently left out.
        """
        op = "list_users"
        try:
            records, _ = self._repo.find_page(0, SIMPLE_LIST_LIMIT)
        except PersistenceError as exc:
            return self._persistence_failure(op, exc)

        today = self._clock()
        items = [UserResponse.from_record(r, today=today).to_data() for r in records]
        return ServiceResult.success(op, {"users": items})

    def list_users_paged(
        self, page: int | None = None, page_size: int | None = None
    ) -> ServiceResult:
        """One page of users with totals.

        *page* is clamped to ``[1, MAX_PAGE]`` and *page_size* to ``[1, 100]``
        (non-positive or unset means 10).
        """
        op = "list_users_paged"
        request = PageRequest.clamp(page, page_size)
        try:
            records, total = self._repo.find_page(request.offset, request.page_size)
        except PersistenceError as exc:
            return self._persistence_failure(op, exc)

        today = self._clock()
        listing = UserListResponse(
            users=[UserResponse.from_record(r, today=today) for r in records],
            page=request.page,
            page_size=request.page_size,
            total=total,
            total_pages=total_pages(total, request.page_size),
        )
        return ServiceResult.success(op, listing.to_data())

    # ------------------------------------------------------------------
    # Failure mapping
    # ------------------------------------------------------------------

    def _validate(self, op: str, request: UserRequest) -> ServiceResult | None:
        vr = request.validate_fields()
        if vr.valid:
            return None
        self._log.warning("invalid_user_request", op=op, errors=vr.errors)
        return ServiceResult.failure(
            op,
            ErrorKind.VALIDATION,
            "; ".join(vr.errors),
            detail={"errors": vr.errors},
        )

    def _not_found(self, op: str, exc: NotFoundError) -> ServiceResult:
        self._log.warning("user_not_found", op=op, user_id=exc.user_id)
        return ServiceResult.failure(
            op,
            ErrorKind.NOT_FOUND,
            "User not found",
            detail={"id": exc.user_id},
        )

    def _persistence_failure(self, op: str, exc: PersistenceError) -> ServiceResult:
        self._log.error("user_operation_failed", op=op, error=str(exc))
        return ServiceResult.failure(op, ErrorKind.PERSISTENCE, str(exc))
