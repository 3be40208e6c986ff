"""
Base Repository Class
Common database operations shared by the student and course repositories
"""
from typing import Dict, List, Optional, Tuple

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from campus.exceptions.exceptions import DatabaseError, ValidationError


def _session_kwargs(session) -> Dict:
    return {"session": session} if session is not None else {}


def _database_error(message: str, error: PyMongoError, session) -> Exception:
    """
    Error to raise for a failed driver call.

    Inside a transaction the driver error is handed back untouched, so
    with_transaction can see its error labels and retry transient failures.
    """
    if session is not None:
        return error
    return DatabaseError(f"{message}: {str(error)}")


class BaseRepo:
    """Base repository with common database operations"""

    duplicate_message = "Duplicate value"

    def __init__(self, collection):
        self.collection = collection

    def find_one(self, query: Dict, projection: Optional[Dict] = None, session=None) -> Optional[Dict]:
        """Find single document"""
        try:
            return self.collection.find_one(query, projection, **_session_kwargs(session))
        except PyMongoError as e:
            raise _database_error("Database query failed", e, session)

    def find_many(self, query: Dict, sort: Optional[List[Tuple[str, int]]] = None,
                  skip: int = 0, limit: int = 0) -> List[Dict]:
        """Find multiple documents, optionally sorted and paginated"""
        try:
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return list(cursor)
        except PyMongoError as e:
            raise DatabaseError(f"Database query failed: {str(e)}")

    def insert_one(self, document: Dict):
        """Insert single document, returns the new _id"""
        try:
            return self.collection.insert_one(document).inserted_id
        except DuplicateKeyError:
            raise ValidationError(self.duplicate_message)
        except PyMongoError as e:
            raise DatabaseError(f"Database insert failed: {str(e)}")

    def update_one(self, query: Dict, update: Dict, session=None) -> bool:
        """Update single document, True when a document matched"""
        try:
            result = self.collection.update_one(query, update, **_session_kwargs(session))
            return result.matched_count > 0
        except PyMongoError as e:
            raise _database_error("Database update failed", e, session)

    def find_one_and_update(self, query: Dict, update: Dict) -> Optional[Dict]:
        """Update single document and return it after the update"""
        try:
            return self.collection.find_one_and_update(
                query, update, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            raise ValidationError(self.duplicate_message)
        except PyMongoError as e:
            raise DatabaseError(f"Database update failed: {str(e)}")

    def update_many(self, query: Dict, update: Dict, session=None) -> int:
        """Update every matching document, returns the modified count"""
        try:
            result = self.collection.update_many(query, update, **_session_kwargs(session))
            return result.modified_count
        except PyMongoError as e:
            raise _database_error("Database update failed", e, session)

    def delete_one(self, query: Dict, session=None) -> bool:
        """Delete single document"""
        try:
            result = self.collection.delete_one(query, **_session_kwargs(session))
            return result.deleted_count > 0
        except PyMongoError as e:
            raise _database_error("Database delete failed", e, session)
