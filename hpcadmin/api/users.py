# hpcadmin/api/users.py

from typing import List

from fastapi import APIRouter, Response, status

from hpcadmin.api.models import ErrorResponse
from hpcadmin.core.context import Context, connection_from
from hpcadmin.data import users as users_data
from hpcadmin.data.models import User, UserCreate, UserUpdate

_ERRORS = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def users_router(ctx: Context) -> APIRouter:
    """
    Build the users resource router.

    The database engine is resolved from ctx once, here; a context that
    never went through bind_connection raises MissingDependencyError.
    """
    engine = connection_from(ctx)
    router = APIRouter(tags=["users"], responses=_ERRORS)

    @router.get("/", response_model=List[User], summary="List users")
    def list_users() -> List[User]:
        return users_data.list_users(engine)

    @router.post(
        "/",
        response_model=User,
        status_code=status.HTTP_201_CREATED,
        summary="Create user",
    )
    def create_user(payload: UserCreate) -> User:
        return users_data.create_user(engine, payload)

    @router.get("/{user_id}", response_model=User, summary="Get user")
    def get_user(user_id: int) -> User:
        return users_data.get_user(engine, user_id)

    @router.put("/{user_id}", response_model=User, summary="Update user")
    def update_user(user_id: int, payload: UserUpdate) -> User:
        return users_data.update_user(engine, user_id, payload)

    @router.delete(
        "/{user_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        summary="Delete user",
    )
    def delete_user(user_id: int) -> Response:
        users_data.delete_user(engine, user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
