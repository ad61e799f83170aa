"""
Shared pytest fixtures: an in-memory stand-in for FirestoreDB and a TestClient
wired to it through dependency overrides. The app lifespan (Firebase init) is
never run.
"""
import copy
import itertools

import pytest
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_firestore
from main import app
from models.user import User


class FakeFirestoreDB:
    """Same surface as services.firestore.FirestoreDB, backed by dicts"""

    def __init__(self):
        self.users = {}
        self.posts = {}
        self._ids = itertools.count(1)

    def _post(self, post_id):
        return {"id": post_id, **copy.deepcopy(self.posts[post_id])}

    def get_user(self, user_id):
        if user_id not in self.users:
            return None
        return {"id": user_id, **copy.deepcopy(self.users[user_id])}

    def create_user(self, user_id, data):
        self.users[user_id] = copy.deepcopy(data)
        return self.get_user(user_id)

    def get_all_posts(self):
        posts = [self._post(post_id) for post_id in self.posts]
        return sorted(posts, key=lambda post: post["date"], reverse=True)

    def get_post(self, post_id):
        if post_id not in self.posts:
            return None
        return self._post(post_id)

    def create_post(self, data):
        post_id = f"post{next(self._ids)}"
        self.posts[post_id] = copy.deepcopy(data)
        return self._post(post_id)

    def update_post(self, post_id, mutate):
        if post_id not in self.posts:
            return None
        changes = mutate(copy.deepcopy(self.posts[post_id]))
        self.posts[post_id].update(copy.deepcopy(changes))
        return self._post(post_id)

    def delete_post(self, post_id, guard):
        if post_id not in self.posts:
            return False
        guard(copy.deepcopy(self.posts[post_id]))
        del self.posts[post_id]
        return True


@pytest.fixture
def db():
    fake = FakeFirestoreDB()
    for user_id, name in (("alice", "Alice"), ("bob", "Bob"), ("carol", "Carol")):
        fake.create_user(user_id, {
            "name": name,
            "email": f"{user_id}@example.com",
            "avatar": f"https://www.gravatar.com/avatar/{user_id}",
            "date": "2024-01-01T00:00:00.000000+00:00",
        })
    return fake


@pytest.fixture
def client(db):
    app.dependency_overrides[get_firestore] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client):
    """Make subsequent requests run as the given user id"""
    def _login(user_id):
        app.dependency_overrides[get_current_user] = lambda: User(
            user_id=user_id,
            email=f"{user_id}@example.com",
        )
    return _login
