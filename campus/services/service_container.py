"""Service Container - wires repositories and services once per app"""
from typing import Dict

from campus.jwt.jwt_utils import TokenService
from campus.repositories.course_repo import CourseRepo
from campus.repositories.identity.identity_store import InMemoryIdentityStore, MongoIdentityStore
from campus.repositories.student_repo import StudentRepo
from campus.services.auth_service import AuthService
from campus.services.course_service import CourseService
from campus.services.enrollment_service import EnrollmentService
from campus.services.student_service import StudentService


def create_identity_store(backend: str, collections: Dict):
    """Pick the identity store for IDENTITY_BACKEND"""
    if backend == "mongo":
        return MongoIdentityStore(collections["users"])
    return InMemoryIdentityStore()


class ServiceContainer:
    """Centralized service creation, handed to resolvers through the context"""

    def __init__(self, config: Dict, collections: Dict, client=None, identity_store=None):
        self.student_repo = StudentRepo(collections["students"])
        self.course_repo = CourseRepo(collections["courses"])

        self.identity_store = identity_store or create_identity_store(config["IDENTITY_BACKEND"], collections)
        self.tokens = TokenService(expires_days=config["JWT_ACCESS_TOKEN_EXPIRES_DAYS"])

        self.students = StudentService(self.student_repo)
        self.courses = CourseService(self.course_repo)
        self.enrollment = EnrollmentService(
            self.student_repo,
            self.course_repo,
            client=client,
            use_transactions=config["MONGO_USE_TRANSACTIONS"],
        )
        self.auth = AuthService(self.identity_store, self.tokens, bcrypt_rounds=config["BCRYPT_ROUNDS"])
