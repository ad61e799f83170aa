import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token

from models.user import User
from services.firestore import FirestoreDB
from services.posts import PostService
from services.users import UserService

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header"
        )

    token = authorization.split("Bearer ")[1]
    try:
        # Verify the Firebase ID token
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
        return User(
            user_id=decoded_token["uid"],
            email=decoded_token.get("email"),
        )
    except Exception as e:
        logger.info("Invalid authentication token: %s", e)
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token"
        )


async def get_firestore(request: Request) -> FirestoreDB:
    """ Get Firestore DB from app state """
    return request.app.state.firestore


Firestore = Annotated[FirestoreDB, Depends(get_firestore)]


async def get_post_service(db: Firestore) -> PostService:
    return PostService(db)


async def get_user_service(db: Firestore) -> UserService:
    return UserService(db)


CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostService, Depends(get_post_service)]
Users = Annotated[UserService, Depends(get_user_service)]
