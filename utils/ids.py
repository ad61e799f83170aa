import re
import uuid

# Firestore reserves ids of the form __name__
RESERVED_ID = re.compile(r"^__.*__$")
MAX_ID_BYTES = 1500


def is_valid_document_id(doc_id: str) -> bool:
    """
    Check that a string can address a Firestore document directly
    :return: False for empty ids, ids containing '/', '.' or '..', reserved ids and oversize ids
    """
    if not doc_id or "/" in doc_id or doc_id in (".", ".."):
        return False
    if RESERVED_ID.match(doc_id):
        return False
    return len(doc_id.encode("utf-8")) <= MAX_ID_BYTES


def new_comment_id() -> str:
    return uuid.uuid4().hex
