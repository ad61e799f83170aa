from fastapi import APIRouter

from dependencies import Users
from models.user import RegisterRequest, UserProfile

router = APIRouter()


@router.post("", response_model=UserProfile)
def register_user(data: RegisterRequest, users: Users):
    """Register a user; the avatar comes from the Gravatar linked to the email"""
    return users.register(
        name=data.name,
        email=data.email,
        password=data.password,
        password2=data.password2,
    )
