"""HTTP handlers for the user resource.

Each handler receives the request plus whatever models the route binds and
maps service outcomes onto the JSON envelope.
"""

from fastapi import Request
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError
from starlette.responses import JSONResponse

from user_api.api.http.middleware.binding import get_path_id
from user_api.api.http.response import error_response, success_response
from user_api.api.utils.app_startup import get_logger
from user_api.core.services.user_service import UserService
from user_api.entities.user import CreateUserRequest, GetUsersQuery, UpdateUserRequest

INVALID_USER_ID = "Invalid user ID"

log = get_logger("user_controller")


def error_message(exc: Exception) -> str:
    """Return the message a client sees for a failed service call."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class UserController:
    def __init__(self, user_service: UserService):
        self._service = user_service

    def create_user(self, request: Request, req: CreateUserRequest) -> JSONResponse:
        try:
            user = self._service.create_user(req)
        except Exception as e:
            log.bind(error_type=type(e).__name__).error("Failed to create user: {}", e)
            return error_response(500, error_message(e))
        return success_response(user)

    def get_user(self, request: Request) -> JSONResponse:
        try:
            user_id = get_path_id(request)
        except ValidationError:
            return error_response(400, INVALID_USER_ID)

        try:
            user = self._service.get_user(user_id)
        except Exception as e:
            log.bind(user_id=user_id).warning("Failed to get user: {}", e)
            return error_response(404, error_message(e))
        return success_response(user)

    def get_users(self, request: Request, query: GetUsersQuery) -> JSONResponse:
        try:
            page = self._service.list_users(query)
        except Exception as e:
            log.bind(error_type=type(e).__name__).error("Failed to list users: {}", e)
            return error_response(500, error_message(e))
        return success_response(page)

    def update_user(self, request: Request, req: UpdateUserRequest) -> JSONResponse:
        try:
            user_id = get_path_id(request)
        except ValidationError:
            return error_response(400, INVALID_USER_ID)

        # Not-found is reported as a server error, unlike get_user
        try:
            user = self._service.update_user(user_id, req)
        except Exception as e:
            log.bind(user_id=user_id, error_type=type(e).__name__).error(
                "Failed to update user: {}", e
            )
            return error_response(500, error_message(e))
        return success_response(user)

    def delete_user(self, request: Request) -> JSONResponse:
        try:
            user_id = get_path_id(request)
        except ValidationError:
            return error_response(400, INVALID_USER_ID)

        try:
            self._service.delete_user(user_id)
        except Exception as e:
            log.bind(user_id=user_id, error_type=type(e).__name__).error(
                "Failed to delete user: {}", e
            )
            return error_response(500, error_message(e))
        return success_response()
