"""JSON serialization utilities for MongoDB ObjectId handling"""
from bson import ObjectId
from datetime import datetime
from typing import Any, Dict, List, Union


def serialize_objectid(obj: Any) -> Any:
    """Convert ObjectId and datetime objects to JSON serializable format"""
    if isinstance(obj, ObjectId):
        return str(obj)
    elif isinstance(obj, datetime):
        return obj.isoformat()
    elif isinstance(obj, dict):
        return {key: serialize_objectid(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [serialize_objectid(item) for item in obj]
    return obj


def sanitize_mongo_document(doc: Union[Dict, List, None]) -> Union[Dict, List, None]:
    """Serialize a document (or list of them) and expose "_id" as "id" """
    if doc is None:
        return None
    if isinstance(doc, list):
        return [sanitize_mongo_document(item) for item in doc]

    sanitized = serialize_objectid(doc)
    if "_id" in sanitized:
        sanitized["id"] = sanitized.pop("_id")
    return sanitized


def order_by_ids(docs: List[Dict], ids: List) -> List[Dict]:
    """Return docs in the order their ids appear in ids"""
    by_id = {str(doc["_id"]): doc for doc in docs}
    return [by_id[str(i)] for i in ids if str(i) in by_id]
