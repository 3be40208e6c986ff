"""
Course Service
Business logic for course CRUD and listing
"""
from typing import Dict, List, Optional

from campus.config.settings import MAX_COURSE_CREDITS, MIN_COURSE_CREDITS
from campus.exceptions.exceptions import NotFoundError, ValidationError
from campus.logging_logs.log_config import get_logger
from campus.repositories.course_repo import CourseRepo
from campus.repositories.query_builder import build_course_query
from campus.utils.formatting.json_utils import order_by_ids, sanitize_mongo_document
from campus.utils.validation.input_validator import InputValidator

logger = get_logger("services.course")

COURSE_FIELDS = ("title", "code", "credits", "instructor")
CREDITS_MESSAGE = f"Credits must be between {MIN_COURSE_CREDITS} and {MAX_COURSE_CREDITS}"


class CourseService:
    def __init__(self, course_repo: CourseRepo):
        self.course_repo = course_repo

    def list_courses(self, filters: Optional[Dict] = None, options: Optional[Dict] = None) -> List[Dict]:
        store_query = build_course_query(filters, options)
        return sanitize_mongo_document(self.course_repo.find_page(store_query))

    def get_many(self, course_ids: List[str]) -> List[Dict]:
        """Resolve a student's course id list"""
        object_ids = [oid for oid in map(InputValidator.parse_object_id, course_ids or []) if oid]
        if not object_ids:
            return []
        docs = self.course_repo.find_by_ids(object_ids)
        return sanitize_mongo_document(order_by_ids(docs, object_ids))

    def add_course(self, data: Dict) -> Dict:
        data = data or {}
        if data.get("credits") is not None:
            InputValidator.validate_int_range(
                data["credits"], CREDITS_MESSAGE, minimum=MIN_COURSE_CREDITS, maximum=MAX_COURSE_CREDITS
            )
        InputValidator.validate_required_fields(data, ["title", "code", "credits", "instructor"])

        if self.course_repo.find_by_code(data["code"]):
            raise ValidationError("Course code already exists")

        course = {
            "title": data["title"],
            "code": data["code"],
            "credits": data["credits"],
            "instructor": data["instructor"],
            "students": [],
        }
        course["_id"] = self.course_repo.create(course)
        logger.info(f"Course {course['_id']} ({course['code']}) added")
        return sanitize_mongo_document(course)

    def update_course(self, course_id: str, data: Dict) -> Dict:
        """Patch only the provided fields"""
        object_id = InputValidator.parse_object_id(course_id)
        if object_id is None:
            raise NotFoundError("Course not found")

        updates = InputValidator.pick_provided(data, COURSE_FIELDS)
        if "credits" in updates:
            InputValidator.validate_int_range(
                updates["credits"], CREDITS_MESSAGE, minimum=MIN_COURSE_CREDITS, maximum=MAX_COURSE_CREDITS
            )
        if "code" in updates:
            InputValidator.validate_required_fields(updates, ["code"])
            if self.course_repo.find_by_code(updates["code"], exclude_id=object_id):
                raise ValidationError("Course code already exists")
        blank = [f for f in ("title", "instructor") if f in updates and not updates[f]]
        if blank:
            raise ValidationError(f"Missing required fields: {', '.join(blank)}")

        if updates:
            updated = self.course_repo.patch(object_id, updates)
        else:
            updated = self.course_repo.find_by_id(object_id)
        if not updated:
            raise NotFoundError("Course not found")

        logger.info(f"Course {course_id} updated: {', '.join(sorted(updates)) or 'no changes'}")
        return sanitize_mongo_document(updated)
