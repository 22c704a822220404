"""User directory routes: list/search, lookup, create, update, delete."""

from fastapi import APIRouter, Depends, Query, status

from src.directory.api.http.deps import get_user_directory_service
from src.directory.api.http.responses import (
    ApiResponse,
    ErrorResponse,
    UserListData,
    UserPayload,
)
from src.directory.core.services import UserDirectoryService
from src.directory.entities.core.user import User

router = APIRouter(tags=["users"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_INVALID = {422: {"model": ErrorResponse}}
_CONFLICT = {409: {"model": ErrorResponse}}


@router.get("/users/all", response_model=ApiResponse[UserListData], responses=_INVALID)
def list_users(
    page: str | None = Query(default=None, description="1-based page number"),
    limit: str | None = Query(default=None, description="Page size"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    order: str | None = Query(default=None, description="asc or desc"),
    gender: str | None = Query(default=None, description="MALE, FEMALE or OTHER"),
    search: str | None = Query(default=None, description="Name, email or phone fragment"),
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> ApiResponse[UserListData]:
    """List users with filtering, sorting and pagination."""
    result = service.list_users(
        page=page,
        limit=limit,
        sort_by=sort_by,
        order=order,
        gender=gender,
        search=search,
    )
    return ApiResponse(
        message="Successfully received all users",
        data=UserListData(
            users=result.users,
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        ),
    )


@router.get("/user/{user_id}", response_model=ApiResponse[User], responses=_NOT_FOUND)
def get_user(
    user_id: int,
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> ApiResponse[User]:
    """Get a user by ID."""
    user = service.get_user(user_id)
    return ApiResponse(
        message=f"Successfully received user with id: {user_id}", data=user
    )


@router.post(
    "/users",
    response_model=ApiResponse[User],
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID | _CONFLICT,
)
def create_user(
    payload: UserPayload,
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> ApiResponse[User]:
    """Create a new user."""
    user = service.create_user(payload.supplied())
    return ApiResponse(message="User created successfully", data=user)


@router.put(
    "/user/{user_id}",
    response_model=ApiResponse[User],
    responses=_NOT_FOUND | _INVALID | _CONFLICT,
)
def update_user(
    user_id: int,
    payload: UserPayload,
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> ApiResponse[User]:
    """Update the supplied fields of a user."""
    user = service.update_user(user_id, payload.supplied())
    return ApiResponse(message="User updated successfully", data=user)


@router.delete("/user/{user_id}", response_model=ApiResponse[None], responses=_NOT_FOUND)
def delete_user(
    user_id: int,
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> ApiResponse[None]:
    """Delete a user."""
    service.delete_user(user_id)
    return ApiResponse(message="User deleted successfully", data=None)
