"""
Student Service
Business logic for student CRUD and listing
"""
from typing import Dict, List, Optional

from campus.config.settings import MIN_STUDENT_AGE
from campus.exceptions.exceptions import NotFoundError, ValidationError
from campus.logging_logs.log_config import get_logger
from campus.repositories.query_builder import build_student_query
from campus.repositories.student_repo import StudentRepo
from campus.utils.formatting.json_utils import order_by_ids, sanitize_mongo_document
from campus.utils.validation.input_validator import InputValidator

logger = get_logger("services.student")

STUDENT_FIELDS = ("name", "email", "age", "major")
AGE_MESSAGE = f"Student must be >= {MIN_STUDENT_AGE}"


class StudentService:
    def __init__(self, student_repo: StudentRepo):
        self.student_repo = student_repo

    def list_students(self, filters: Optional[Dict] = None, options: Optional[Dict] = None) -> List[Dict]:
        store_query = build_student_query(filters, options)
        return sanitize_mongo_document(self.student_repo.find_page(store_query))

    def get_many(self, student_ids: List[str]) -> List[Dict]:
        """Resolve a course's student id list"""
        object_ids = [oid for oid in map(InputValidator.parse_object_id, student_ids or []) if oid]
        if not object_ids:
            return []
        docs = self.student_repo.find_by_ids(object_ids)
        return sanitize_mongo_document(order_by_ids(docs, object_ids))

    def add_student(self, data: Dict) -> Dict:
        InputValidator.validate_required_fields(data or {}, ["name", "email", "age"])
        email = InputValidator.validate_email(data["email"])
        age = InputValidator.validate_int_range(data["age"], AGE_MESSAGE, minimum=MIN_STUDENT_AGE)

        if self.student_repo.find_by_email(email):
            raise ValidationError("Email already exists")

        student = {
            "name": data["name"],
            "email": email,
            "age": age,
            "major": data.get("major") or "",
            "courses": [],
        }
        student["_id"] = self.student_repo.create(student)
        logger.info(f"Student {student['_id']} added")
        return sanitize_mongo_document(student)

    def update_student(self, student_id: str, data: Dict) -> Dict:
        """Patch only the provided fields"""
        object_id = InputValidator.parse_object_id(student_id)
        if object_id is None:
            raise NotFoundError("Student not found")

        updates = InputValidator.pick_provided(data, STUDENT_FIELDS)
        if "email" in updates:
            updates["email"] = InputValidator.validate_email(updates["email"])
            if self.student_repo.find_by_email(updates["email"], exclude_id=object_id):
                raise ValidationError("Email already exists")
        if "age" in updates:
            InputValidator.validate_int_range(updates["age"], AGE_MESSAGE, minimum=MIN_STUDENT_AGE)
        if "name" in updates and not updates["name"]:
            raise ValidationError("Missing required fields: name")

        if updates:
            updated = self.student_repo.patch(object_id, updates)
        else:
            updated = self.student_repo.find_by_id(object_id)
        if not updated:
            raise NotFoundError("Student not found")

        logger.info(f"Student {student_id} updated: {', '.join(sorted(updates)) or 'no changes'}")
        return sanitize_mongo_document(updated)
