"""
Enrollment Service
Keeps student.courses and course.students in step:
    course in student.courses  <=>  student in course.students

Every operation here writes to both collections. Unless transactions are
enabled the two writes are not atomic, so a failure between them leaves a
one-sided relation behind; reconcile() repairs those.
"""
from typing import Callable, Dict, Tuple

from bson import ObjectId
from pymongo.errors import PyMongoError

from campus.exceptions.exceptions import DatabaseError, NotFoundError
from campus.logging_logs.log_config import get_logger
from campus.repositories.course_repo import CourseRepo
from campus.repositories.student_repo import StudentRepo
from campus.utils.formatting.json_utils import sanitize_mongo_document
from campus.utils.validation.input_validator import InputValidator

logger = get_logger("services.enrollment")


class EnrollmentService:
    def __init__(self, student_repo: StudentRepo, course_repo: CourseRepo,
                 client=None, use_transactions: bool = False):
        self.student_repo = student_repo
        self.course_repo = course_repo
        self.client = client
        self.use_transactions = use_transactions and client is not None

    # ═══════════════════════════════════════════════════════════════════════
    # ENROLL / UNENROLL
    # ═══════════════════════════════════════════════════════════════════════

    def enroll(self, student_id: str, course_id: str) -> Dict:
        """Idempotently pair a student and a course, returns the student"""
        student_oid, course_oid = self._resolve_pair(student_id, course_id)

        def write(session):
            self.student_repo.add_course(student_oid, course_oid, session=session)
            self.course_repo.add_student(course_oid, student_oid, session=session)

        self._run_pair(write)
        logger.info(f"Student {student_id} enrolled in course {course_id}")
        return sanitize_mongo_document(self.student_repo.find_by_id(student_oid))

    def unenroll(self, student_id: str, course_id: str) -> Dict:
        """Remove the pairing from both sides, a missing pairing is a no-op"""
        student_oid, course_oid = self._resolve_pair(student_id, course_id)

        def write(session):
            self.student_repo.remove_course(student_oid, course_oid, session=session)
            self.course_repo.remove_student(course_oid, student_oid, session=session)

        self._run_pair(write)
        logger.info(f"Student {student_id} unenrolled from course {course_id}")
        return sanitize_mongo_document(self.student_repo.find_by_id(student_oid))

    # ═══════════════════════════════════════════════════════════════════════
    # CASCADING DELETES
    # ═══════════════════════════════════════════════════════════════════════

    def delete_student(self, student_id: str) -> bool:
        """Delete a student and pull its id from every course"""
        student_oid = InputValidator.parse_object_id(student_id)
        if student_oid is None or not self.student_repo.find_by_id(student_oid):
            return False

        def write(session):
            self.course_repo.pull_student_from_all(student_oid, session=session)
            self.student_repo.delete(student_oid, session=session)

        self._run_pair(write)
        logger.info(f"Student {student_id} deleted")
        return True

    def delete_course(self, course_id: str) -> bool:
        """Delete a course and pull its id from every student"""
        course_oid = InputValidator.parse_object_id(course_id)
        if course_oid is None or not self.course_repo.find_by_id(course_oid):
            return False

        def write(session):
            self.student_repo.pull_course_from_all(course_oid, session=session)
            self.course_repo.delete(course_oid, session=session)

        self._run_pair(write)
        logger.info(f"Course {course_id} deleted")
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # REPAIR SWEEP
    # ═══════════════════════════════════════════════════════════════════════

    def reconcile(self) -> Dict:
        """
        Repair one-sided relations left by partial writes.

        A reference between two existing documents is completed on the
        missing side; a reference to a document that no longer exists is
        pulled.
        """
        report = {"studentsRepaired": 0, "coursesRepaired": 0, "danglingRemoved": 0}

        students = self.student_repo.find_all()
        courses = self.course_repo.find_all()
        student_courses = {s["_id"]: set(s.get("courses", [])) for s in students}
        course_students = {c["_id"]: set(c.get("students", [])) for c in courses}

        for student in students:
            for course_oid in student.get("courses", []):
                if course_oid not in course_students:
                    self.student_repo.remove_course(student["_id"], course_oid)
                    report["danglingRemoved"] += 1
                elif student["_id"] not in course_students[course_oid]:
                    self.course_repo.add_student(course_oid, student["_id"])
                    course_students[course_oid].add(student["_id"])
                    report["coursesRepaired"] += 1

        for course in courses:
            for student_oid in course.get("students", []):
                if student_oid not in student_courses:
                    self.course_repo.remove_student(course["_id"], student_oid)
                    report["danglingRemoved"] += 1
                elif course["_id"] not in student_courses[student_oid]:
                    self.student_repo.add_course(student_oid, course["_id"])
                    student_courses[student_oid].add(course["_id"])
                    report["studentsRepaired"] += 1

        logger.info(f"Enrollment reconcile finished: {report}")
        return report

    # ═══════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════

    def _resolve_pair(self, student_id: str, course_id: str) -> Tuple[ObjectId, ObjectId]:
        student_oid = InputValidator.parse_object_id(student_id)
        course_oid = InputValidator.parse_object_id(course_id)
        student = self.student_repo.find_by_id(student_oid) if student_oid else None
        course = self.course_repo.find_by_id(course_oid) if course_oid else None
        if not student or not course:
            raise NotFoundError("Student or course not found")
        return student_oid, course_oid

    def _run_pair(self, write: Callable) -> None:
        """Run a two-collection write, inside a transaction when enabled"""
        if not self.use_transactions:
            write(None)
            return
        try:
            with self.client.start_session() as session:
                session.with_transaction(write)
        except PyMongoError as e:
            # Raised once with_transaction has given up retrying
            raise DatabaseError(f"Database transaction failed: {str(e)}")
