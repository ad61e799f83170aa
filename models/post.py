from pydantic import BaseModel
from typing import List, Optional


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: str


class Post(BaseModel):
    id: Optional[str] = None
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: str
    likes: List[Like] = []
    comments: List[Comment] = []


class PostRequest(BaseModel):
    text: str


class CommentRequest(BaseModel):
    text: str
