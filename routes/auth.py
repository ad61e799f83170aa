import logging
from urllib.parse import urlparse

from fastapi import APIRouter, Request, Response, HTTPException
from firebase_admin import auth

from config import SESSION_EXPIRES_IN, SESSION_COOKIE_SECURE
from dependencies import CurrentUser, Users
from models.token import TokenRequest
from models.user import UserProfile

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("", response_model=UserProfile)
def get_me(current_user: CurrentUser, users: Users):
    """Profile of the authenticated user"""
    return users.get_profile(current_user.user_id)


@router.post("/login")
def login(data: TokenRequest, request: Request, response: Response):
    try:
        # Verify the ID token
        decoded_token = auth.verify_id_token(
            id_token=data.id_token,
            clock_skew_seconds=10
        )

        # Create a session cookie
        session_cookie = auth.create_session_cookie(
            data.id_token,
            expires_in=SESSION_EXPIRES_IN
        )
    except Exception as e:
        logger.info("Login rejected: %s", e)
        raise HTTPException(status_code=401, detail="Authentication failed")

    origin = request.headers.get("origin", "")
    domain = None

    # If in production, extract domain from origin
    if origin and "localhost" not in origin:
        domain = urlparse(origin).hostname

    response.set_cookie(
        key="session",
        value=str(session_cookie),
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        max_age=SESSION_EXPIRES_IN,
        path="/",
        samesite="lax",
        domain=domain
    )

    return {"success": True, "user_id": decoded_token["uid"]}


@router.post("/logout")
def logout(response: Response):
    # Clear the session cookie
    response.delete_cookie(
        key="session",
        path="/",
        httponly=True,
        secure=SESSION_COOKIE_SECURE
    )
    return {"success": True}


@router.get("/verify")
def verify_session(request: Request):
    session_cookie = request.cookies.get("session")
    if not session_cookie:
        raise HTTPException(status_code=401, detail="No session cookie found")

    try:
        decoded_claims = auth.verify_session_cookie(
            session_cookie=session_cookie,
            check_revoked=True,
            clock_skew_seconds=10
        )
    except auth.InvalidSessionCookieError:
        raise HTTPException(status_code=401, detail="Invalid session")
    except Exception as e:
        logger.info("Session verification failed: %s", e)
        raise HTTPException(status_code=401, detail="Session verification failed")

    return {
        "valid": True,
        "user": {
            "uid": decoded_claims["uid"],
            "email": decoded_claims.get("email")
        }
    }
