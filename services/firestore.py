from typing import Any, Callable, Dict, List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.cloud import firestore

# Receives the stored post and returns the fields to write back
PostMutation = Callable[[Dict[str, Any]], Dict[str, Any]]
# Receives the stored post and raises to veto the delete
PostGuard = Callable[[Dict[str, Any]], None]


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user profile by ID"""
        snapshot = self.collection("users").document(user_id).get()
        if not snapshot.exists:
            return None
        user_data = snapshot.to_dict()
        user_data["id"] = snapshot.id
        return user_data

    def create_user(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Store a user profile under the Firebase Auth uid"""
        self.collection("users").document(user_id).set(data)
        return {"id": user_id, **data}

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection("posts").order_by("date", direction=firestore.Query.DESCENDING).stream()
        posts = []
        for doc in posts_ref:
            post_data = doc.to_dict()
            post_data["id"] = doc.id
            posts.append(post_data)
        return posts

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID"""
        snapshot = self.collection("posts").document(post_id).get()
        if not snapshot.exists:
            return None
        post_data = snapshot.to_dict()
        post_data["id"] = snapshot.id
        return post_data

    def create_post(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new post"""
        new_post_ref = self.collection("posts").document()
        new_post_ref.set(data)
        return {"id": new_post_ref.id, **data}

    def update_post(self, post_id: str, mutate: PostMutation) -> Optional[Dict[str, Any]]:
        """
        Read a post, apply mutate and write the changed fields back in one transaction.
        Firestore reruns the transaction on contention, so mutate must not keep state
        between calls. Exceptions raised by mutate abort the transaction.

        :return: the updated post, or None when the post does not exist
        """
        post_ref = self.collection("posts").document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None

            post_data = snapshot.to_dict()
            changes = mutate(post_data)

            transaction.update(post_ref, changes)
            post_data.update(changes)
            post_data["id"] = snapshot.id
            return post_data

        return update_in_transaction(transaction, post_ref)

    def delete_post(self, post_id: str, guard: PostGuard) -> bool:
        """
        Delete a post once guard accepts it, inside one transaction
        :return: False when the post does not exist
        """
        post_ref = self.collection("posts").document(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def delete_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                return False

            guard(snapshot.to_dict())
            transaction.delete(post_ref)
            return True

        return delete_in_transaction(transaction, post_ref)
