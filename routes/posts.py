from typing import List, Dict

from fastapi import APIRouter

from dependencies import Posts, CurrentUser
from models.post import Post, PostRequest, Like, Comment, CommentRequest

router = APIRouter()


@router.post("", response_model=Post)
def create_post(data: PostRequest, posts: Posts, current_user: CurrentUser):
    """Create a post as the current user"""
    return posts.create_post(current_user.user_id, data.text)


@router.get("", response_model=List[Post])
def get_posts(posts: Posts, current_user: CurrentUser):
    """Get all posts, newest first"""
    return posts.list_posts()


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.get_post(post_id)


@router.delete("/{post_id}")
def delete_post(post_id: str, posts: Posts, current_user: CurrentUser) -> Dict[str, str]:
    """Delete a post; only its owner may do so"""
    posts.delete_post(post_id, current_user.user_id)
    return {"msg": "Post removed"}


@router.put("/like/{post_id}", response_model=List[Like])
def like_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.like_post(post_id, current_user.user_id)


@router.put("/unlike/{post_id}", response_model=List[Like])
def unlike_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.unlike_post(post_id, current_user.user_id)


@router.post("/comment/{post_id}", response_model=List[Comment])
def add_comment(post_id: str, data: CommentRequest, posts: Posts, current_user: CurrentUser):
    """Comment on a post"""
    return posts.add_comment(post_id, current_user.user_id, data.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[Comment])
def delete_comment(post_id: str, comment_id: str, posts: Posts, current_user: CurrentUser):
    """Delete a comment; only its author may do so"""
    return posts.delete_comment(post_id, comment_id, current_user.user_id)
