"""
Identity Stores
Signup/login records: {id, email, passwordHash}. No relations, no updates.
"""
import re
import threading
import time
from typing import Dict, List, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from campus.exceptions.exceptions import DatabaseError, ValidationError

ID_ATTEMPTS = 5


def timestamp_id(last_id: Optional[str] = None) -> str:
    """Millisecond timestamp id, bumped past last_id so ids stay unique"""
    candidate = int(time.time() * 1000)
    if last_id is not None and candidate <= int(last_id):
        candidate = int(last_id) + 1
    return str(candidate)


class InMemoryIdentityStore:
    """
    Process-lifetime store. Everything is lost on restart, while tokens
    issued before the restart stay valid until they expire.
    """

    def __init__(self):
        self._records: List[Dict] = []
        self._lock = threading.Lock()
        self._last_id: Optional[str] = None

    def find_by_email(self, email: str) -> Optional[Dict]:
        wanted = email.lower()
        with self._lock:
            for record in self._records:
                if record["email"].lower() == wanted:
                    return dict(record)
        return None

    def create(self, email: str, password_hash: str) -> Dict:
        with self._lock:
            if any(r["email"].lower() == email.lower() for r in self._records):
                raise ValidationError("Email already exists")
            self._last_id = timestamp_id(self._last_id)
            record = {"id": self._last_id, "email": email, "passwordHash": password_hash}
            self._records.append(record)
            return dict(record)

    def clear(self) -> None:
        """Drop every record, as a process restart would"""
        with self._lock:
            self._records = []

    def __len__(self):
        return len(self._records)


class MongoIdentityStore:
    """Durable store backed by the users collection"""

    def __init__(self, collection):
        self.collection = collection
        self._lock = threading.Lock()
        self._last_id: Optional[str] = None

    def find_by_email(self, email: str) -> Optional[Dict]:
        try:
            return self.collection.find_one(
                {"email": {"$regex": f"^{re.escape(email)}$", "$options": "i"}},
                {"_id": 0}
            )
        except PyMongoError as e:
            raise DatabaseError(f"Database query failed: {str(e)}")

    def create(self, email: str, password_hash: str) -> Dict:
        """
        Insert a new user. Another process may already hold the minted id,
        in which case the unique id index rejects it and a later id is tried.
        """
        for _ in range(ID_ATTEMPTS):
            with self._lock:
                self._last_id = timestamp_id(self._last_id)
                record = {"id": self._last_id, "email": email, "passwordHash": password_hash}
            try:
                self.collection.insert_one(dict(record))
                return record
            except DuplicateKeyError:
                if self.find_by_email(email):
                    raise ValidationError("Email already exists")
            except PyMongoError as e:
                raise DatabaseError(f"Database insert failed: {str(e)}")
        raise DatabaseError("Could not allocate a user id")

    def __len__(self):
        return self.collection.count_documents({})
