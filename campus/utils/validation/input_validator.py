"""
Input Validators
Centralized validation logic shared by the student, course and auth services
"""
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from campus.exceptions.exceptions import ValidationError


class InputValidator:
    """Centralized input validation"""

    @staticmethod
    def parse_object_id(obj_id: Any) -> Optional[ObjectId]:
        """Convert to ObjectId, None when the value cannot be one"""
        if isinstance(obj_id, ObjectId):
            return obj_id
        try:
            return ObjectId(obj_id)
        except (InvalidId, TypeError):
            return None

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> None:
        """Validate required fields are present and not blank"""
        missing = [field for field in required_fields if data.get(field) in (None, "")]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    @staticmethod
    def validate_email(email: Any) -> str:
        if not isinstance(email, str) or "@" not in email:
            raise ValidationError("Invalid email")
        return email.strip()

    @staticmethod
    def validate_int_range(value: Any, message: str,
                           minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
        """Reject non-integers and values outside [minimum, maximum]"""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(message)
        if minimum is not None and value < minimum:
            raise ValidationError(message)
        if maximum is not None and value > maximum:
            raise ValidationError(message)
        return value

    @staticmethod
    def validate_password(password: Any, min_length: int) -> str:
        if not isinstance(password, str) or len(password) < min_length:
            raise ValidationError("Password too short")
        return password

    @staticmethod
    def pick_provided(data: Optional[Dict], allowed_fields: tuple) -> Dict:
        """Keep only allowed fields that were given a non-null value"""
        data = data or {}
        return {f: data[f] for f in allowed_fields if data.get(f) is not None}
