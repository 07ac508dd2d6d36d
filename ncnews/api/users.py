# ncnews/api/users.py
from fastapi import APIRouter, status

from ncnews.models.schemas import UserCreate, UserResponse, UsersResponse
from ncnews.services import users as svc

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UsersResponse, summary="All users")
async def api_list_users():
    return {"users": await svc.list_users()}


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
             summary="Create a user")
async def api_post_user(payload: UserCreate):
    return {"user": await svc.insert_user(payload)}


@router.get("/{username}", response_model=UserResponse, summary="User by username")
async def api_get_user(username: str):
    return {"user": await svc.get_user(username)}
