"""Course Repository - Data Access Layer (SoC)"""
import re
from typing import Dict, List, Optional

from bson import ObjectId

from campus.repositories.core.base_repo import BaseRepo


class CourseRepo(BaseRepo):
    duplicate_message = "Course code already exists"

    def find_by_id(self, course_id: ObjectId, session=None) -> Optional[Dict]:
        return self.find_one({"_id": course_id}, session=session)

    def find_by_ids(self, course_ids: List[ObjectId]) -> List[Dict]:
        return self.find_many({"_id": {"$in": list(course_ids)}})

    def find_by_code(self, code: str, exclude_id: Optional[ObjectId] = None) -> Optional[Dict]:
        """Case-insensitive exact code lookup"""
        query = {"code": {"$regex": f"^{re.escape(code)}$", "$options": "i"}}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return self.find_one(query)

    def find_page(self, store_query: Dict) -> List[Dict]:
        """Run a query built by build_course_query"""
        return self.find_many(
            store_query["filter"],
            sort=store_query["sort"],
            skip=store_query["skip"],
            limit=store_query["limit"],
        )

    def find_all(self) -> List[Dict]:
        return self.find_many({})

    def create(self, course: Dict) -> ObjectId:
        return self.insert_one(course)

    def patch(self, course_id: ObjectId, fields: Dict) -> Optional[Dict]:
        return self.find_one_and_update({"_id": course_id}, {"$set": fields})

    def add_student(self, course_id: ObjectId, student_id: ObjectId, session=None) -> bool:
        return self.update_one({"_id": course_id}, {"$addToSet": {"students": student_id}}, session=session)

    def remove_student(self, course_id: ObjectId, student_id: ObjectId, session=None) -> bool:
        return self.update_one({"_id": course_id}, {"$pull": {"students": student_id}}, session=session)

    def pull_student_from_all(self, student_id: ObjectId, session=None) -> int:
        """Remove a student id from every course, whatever their recorded relations"""
        return self.update_many({}, {"$pull": {"students": student_id}}, session=session)

    def delete(self, course_id: ObjectId, session=None) -> bool:
        return self.delete_one({"_id": course_id}, session=session)
