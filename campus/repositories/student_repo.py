"""Student Repository - Data Access Layer (SoC)"""
import re
from typing import Dict, List, Optional

from bson import ObjectId

from campus.repositories.core.base_repo import BaseRepo


class StudentRepo(BaseRepo):
    duplicate_message = "Email already exists"

    def find_by_id(self, student_id: ObjectId, session=None) -> Optional[Dict]:
        return self.find_one({"_id": student_id}, session=session)

    def find_by_ids(self, student_ids: List[ObjectId]) -> List[Dict]:
        return self.find_many({"_id": {"$in": list(student_ids)}})

    def find_by_email(self, email: str, exclude_id: Optional[ObjectId] = None) -> Optional[Dict]:
        """Case-insensitive exact email lookup"""
        query = {"email": {"$regex": f"^{re.escape(email)}$", "$options": "i"}}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return self.find_one(query)

    def find_page(self, store_query: Dict) -> List[Dict]:
        """Run a query built by build_student_query"""
        return self.find_many(
            store_query["filter"],
            sort=store_query["sort"],
            skip=store_query["skip"],
            limit=store_query["limit"],
        )

    def find_all(self) -> List[Dict]:
        return self.find_many({})

    def create(self, student: Dict) -> ObjectId:
        return self.insert_one(student)

    def patch(self, student_id: ObjectId, fields: Dict) -> Optional[Dict]:
        return self.find_one_and_update({"_id": student_id}, {"$set": fields})

    def add_course(self, student_id: ObjectId, course_id: ObjectId, session=None) -> bool:
        return self.update_one({"_id": student_id}, {"$addToSet": {"courses": course_id}}, session=session)

    def remove_course(self, student_id: ObjectId, course_id: ObjectId, session=None) -> bool:
        return self.update_one({"_id": student_id}, {"$pull": {"courses": course_id}}, session=session)

    def pull_course_from_all(self, course_id: ObjectId, session=None) -> int:
        """Remove a course id from every student, whatever their recorded relations"""
        return self.update_many({}, {"$pull": {"courses": course_id}}, session=session)

    def delete(self, student_id: ObjectId, session=None) -> bool:
        return self.delete_one({"_id": student_id}, session=session)
