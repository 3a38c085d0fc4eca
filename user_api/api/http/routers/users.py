"""User API router with CRUD operations."""

from fastapi import APIRouter

from user_api.api.http.controllers.user import UserController
from user_api.api.http.middleware.binding import add_bound_route
from user_api.entities.user import CreateUserRequest, GetUsersQuery, UpdateUserRequest


def build_user_router(controller: UserController) -> APIRouter:
    """Wire the user controller onto ``/users``.

    Create, list and update bind their request models through the binding
    middleware; get and delete only read the path id.
    """
    router = APIRouter(prefix="/users", tags=["users"])

    add_bound_route(
        router,
        "",
        controller.create_user,
        CreateUserRequest,
        methods=["POST"],
        name="create_user",
        summary="Create a new user",
    )
    add_bound_route(
        router,
        "",
        controller.get_users,
        GetUsersQuery,
        methods=["GET"],
        name="get_users",
        summary="List users with pagination and filters",
    )
    router.add_api_route(
        "/{id}",
        controller.get_user,
        methods=["GET"],
        response_model=None,
        name="get_user",
        summary="Get a user by ID",
    )
    add_bound_route(
        router,
        "/{id}",
        controller.update_user,
        UpdateUserRequest,
        methods=["PUT"],
        name="update_user",
        summary="Update a user",
    )
    router.add_api_route(
        "/{id}",
        controller.delete_user,
        methods=["DELETE"],
        response_model=None,
        name="delete_user",
        summary="Delete a user",
    )

    return router
