import os

from dotenv import load_dotenv

load_dotenv()

# Firebase service account
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Session cookie
SESSION_EXPIRES_IN = int(os.getenv("SESSION_EXPIRES_DAYS", "5")) * 24 * 60 * 60
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"

GRAVATAR_URL = "https://www.gravatar.com/avatar/"
