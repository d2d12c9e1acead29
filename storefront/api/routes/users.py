"""Users Routes: HTTP surface of the auto-ID user store.

Invariants:
    - One store call per request; no business logic here
    - Store errors propagate to the global handlers (status from the error class)
    - /users/active and /users/age/{min_age} are declared before /users/{user_id}
"""

from fastapi import APIRouter, Depends, Path, Query, status

from storefront.api.dependencies import get_user_store
from storefront.core.documents import INTEGER_MAX, INTEGER_MIN, clamp_integer
from storefront.core.errors import InvalidInputError
from storefront.core.repository_protocols import UserStoreLike
from storefront.schemas.user import UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    active: str | None = Query(None),
    store: UserStoreLike = Depends(get_user_store),
):
    """List users, optionally filtered by ?active=true|false."""
    is_active = (active == "true") if active else None
    return await store.find_all(is_active=is_active)


@router.get("/active")
async def list_active_users(store: UserStoreLike = Depends(get_user_store)):
    return await store.find_all(is_active=True)


@router.get("/age/{min_age}")
async def list_users_older_than(
    min_age: str,
    active: str | None = Query(None),
    store: UserStoreLike = Depends(get_user_store),
):
    """Users strictly older than min_age; ?active=true narrows to active users."""
    try:
        threshold = int(min_age)
    except ValueError:
        raise InvalidInputError("Invalid age", field="minAge")
    users = await store.find_all(
        is_active=True if active == "true" else None,
        min_age=clamp_integer(threshold),
    )
    return {"count": len(users), "users": users}


@router.get("/{user_id}")
async def get_user(
    user_id: int = Path(ge=INTEGER_MIN, le=INTEGER_MAX),
    store: UserStoreLike = Depends(get_user_store),
):
    return await store.get(user_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, store: UserStoreLike = Depends(get_user_store),
):
    """Create a user. The store assigns the id."""
    return await store.create(body.model_dump(exclude_unset=True))


@router.put("/{user_id}")
async def update_user(
    body: UserUpdate,
    user_id: int = Path(ge=INTEGER_MIN, le=INTEGER_MAX),
    store: UserStoreLike = Depends(get_user_store),
):
    """Partially update a user. A client-supplied id is ignored."""
    return await store.update(user_id, body.to_payload())


@router.patch("/{user_id}/toggle-active")
async def toggle_user_active(
    user_id: int = Path(ge=INTEGER_MIN, le=INTEGER_MAX),
    store: UserStoreLike = Depends(get_user_store),
):
    is_active = await store.toggle_active(user_id)
    return {
        "message": f"User {'activated' if is_active else 'deactivated'}",
        "isActive": is_active,
    }


@router.delete("/{user_id}")
async def delete_user(
    user_id: int = Path(ge=INTEGER_MIN, le=INTEGER_MAX),
    store: UserStoreLike = Depends(get_user_store),
):
    await store.delete(user_id)
    return {"message": "User deleted successfully"}
