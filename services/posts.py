import html
import logging
from typing import Any, Dict, List, Optional

import bleach

from services.errors import BadRequest, NotFound, Unauthorized, ValidationError, data_access
from services.firestore import FirestoreDB, PostMutation
from utils.dates import now_iso
from utils.ids import is_valid_document_id, new_comment_id

logger = logging.getLogger(__name__)


def clean_text(text: str) -> str:
    """Strip markup from user text and reject what is left if it is blank"""
    # bleach escapes &, < and >; store the characters as the user typed them
    sanitized = html.unescape(bleach.clean(text or "", strip=True)).strip()
    if not sanitized:
        raise ValidationError("Text is required")
    return sanitized


def index_of(items: List[Dict[str, Any]], field: str, value: str) -> Optional[int]:
    for index, item in enumerate(items):
        if item.get(field) == value:
            return index
    return None


class PostService:
    """Posts and the likes/comments embedded in them"""

    def __init__(self, db: FirestoreDB):
        self.db = db

    def _author(self, user_id: str) -> Dict[str, Any]:
        with data_access("loading user"):
            user = self.db.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def _update(self, post_id: str, mutate: PostMutation, action: str) -> Dict[str, Any]:
        if not is_valid_document_id(post_id):
            raise NotFound("Post not found")
        with data_access(action):
            post = self.db.update_post(post_id, mutate)
        if post is None:
            raise NotFound("Post not found")
        return post

    def create_post(self, user_id: str, text: str) -> Dict[str, Any]:
        text = clean_text(text)
        user = self._author(user_id)

        new_post = {
            "text": text,
            "name": user.get("name"),
            "avatar": user.get("avatar"),
            "user": user_id,
            "date": now_iso(),
            "likes": [],
            "comments": [],
        }
        with data_access("creating post"):
            post = self.db.create_post(new_post)

        logger.info("User %s created post %s", user_id, post["id"])
        return post

    def list_posts(self) -> List[Dict[str, Any]]:
        with data_access("listing posts"):
            return self.db.get_all_posts()

    def get_post(self, post_id: str) -> Dict[str, Any]:
        if not is_valid_document_id(post_id):
            raise NotFound("Post not found")
        with data_access("loading post"):
            post = self.db.get_post(post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def delete_post(self, post_id: str, user_id: str) -> None:
        if not is_valid_document_id(post_id):
            raise NotFound("Post not found")

        def ensure_owner(post: Dict[str, Any]) -> None:
            if post.get("user") != user_id:
                raise Unauthorized("User not authorized")

        with data_access("deleting post"):
            deleted = self.db.delete_post(post_id, ensure_owner)
        if not deleted:
            raise NotFound("Post not found")

        logger.info("User %s deleted post %s", user_id, post_id)

    def like_post(self, post_id: str, user_id: str) -> List[Dict[str, Any]]:
        def add_like(post: Dict[str, Any]) -> Dict[str, Any]:
            likes = post.get("likes", [])
            if index_of(likes, "user", user_id) is not None:
                raise BadRequest("Post already liked")
            return {"likes": [{"user": user_id}] + likes}

        return self._update(post_id, add_like, "liking post")["likes"]

    def unlike_post(self, post_id: str, user_id: str) -> List[Dict[str, Any]]:
        def remove_like(post: Dict[str, Any]) -> Dict[str, Any]:
            likes = post.get("likes", [])
            remove_index = index_of(likes, "user", user_id)
            if remove_index is None:
                raise BadRequest("Post is not liked")
            return {"likes": likes[:remove_index] + likes[remove_index + 1:]}

        return self._update(post_id, remove_like, "unliking post")["likes"]

    def add_comment(self, post_id: str, user_id: str, text: str) -> List[Dict[str, Any]]:
        text = clean_text(text)
        user = self._author(user_id)

        new_comment = {
            "id": new_comment_id(),
            "text": text,
            "name": user.get("name"),
            "avatar": user.get("avatar"),
            "user": user_id,
            "date": now_iso(),
        }

        def prepend_comment(post: Dict[str, Any]) -> Dict[str, Any]:
            return {"comments": [new_comment] + post.get("comments", [])}

        return self._update(post_id, prepend_comment, "adding comment")["comments"]

    def delete_comment(self, post_id: str, comment_id: str, user_id: str) -> List[Dict[str, Any]]:
        def remove_comment(post: Dict[str, Any]) -> Dict[str, Any]:
            comments = post.get("comments", [])
            remove_index = index_of(comments, "id", comment_id)
            if remove_index is None:
                raise NotFound("Comment does not exist")
            if comments[remove_index].get("user") != user_id:
                raise Unauthorized("User not authorized")
            return {"comments": comments[:remove_index] + comments[remove_index + 1:]}

        return self._update(post_id, remove_comment, "deleting comment")["comments"]
