"""Resolver bindings - Presentation Layer (SoC)"""
from ariadne import MutationType, ObjectType, QueryType

from campus.jwt.auth_middleware import login_required

query = QueryType()
mutation = MutationType()
student_type = ObjectType("Student")
course_type = ObjectType("Course")


def _services(info):
    return info.context["services"]


# ============= QUERIES =============

@query.field("getAllStudents")
def resolve_get_all_students(_, info, filter=None, options=None):
    return _services(info).students.list_students(filter, options)


@query.field("getAllCourses")
def resolve_get_all_courses(_, info, filter=None, options=None):
    return _services(info).courses.list_courses(filter, options)


# ============= AUTH =============

@mutation.field("signup")
def resolve_signup(_, info, email, password):
    return _services(info).auth.signup(email, password)


@mutation.field("login")
def resolve_login(_, info, email, password):
    return _services(info).auth.login(email, password)


# ============= STUDENTS =============

@mutation.field("addStudent")
@login_required
def resolve_add_student(_, info, input):
    return _services(info).students.add_student(input)


@mutation.field("updateStudent")
@login_required
def resolve_update_student(_, info, id, input):
    return _services(info).students.update_student(id, input)


@mutation.field("deleteStudent")
@login_required
def resolve_delete_student(_, info, id):
    return _services(info).enrollment.delete_student(id)


# ============= COURSES =============

@mutation.field("addCourse")
@login_required
def resolve_add_course(_, info, input):
    return _services(info).courses.add_course(input)


@mutation.field("updateCourse")
@login_required
def resolve_update_course(_, info, id, input):
    return _services(info).courses.update_course(id, input)


@mutation.field("deleteCourse")
@login_required
def resolve_delete_course(_, info, id):
    return _services(info).enrollment.delete_course(id)


# ============= ENROLLMENTS =============

@mutation.field("enrollStudent")
@login_required
def resolve_enroll_student(_, info, student_id, course_id):
    return _services(info).enrollment.enroll(student_id, course_id)


@mutation.field("unenrollStudent")
@login_required
def resolve_unenroll_student(_, info, student_id, course_id):
    return _services(info).enrollment.unenroll(student_id, course_id)


# ============= RELATION FIELDS =============
# Re-queried on demand, only when the client selects them

@student_type.field("courses")
def resolve_student_courses(student, info):
    return _services(info).courses.get_many(student.get("courses", []))


@student_type.field("coursesCount")
def resolve_student_courses_count(student, info):
    return len(student.get("courses") or [])


@course_type.field("students")
def resolve_course_students(course, info):
    return _services(info).students.get_many(course.get("students", []))


@course_type.field("studentsCount")
def resolve_course_students_count(course, info):
    return len(course.get("students") or [])
