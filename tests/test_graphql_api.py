"""End-to-end GraphQL tests through the Flask test client."""
from conftest import TEST_CONFIG, error_messages, run_graphql

from campus.app import create_app

ADD_STUDENT = """
mutation AddStudent($input: StudentInput!) {
  addStudent(input: $input) { id name email age major coursesCount }
}
"""

ADD_COURSE = """
mutation AddCourse($input: CourseInput!) {
  addCourse(input: $input) { id title code credits instructor studentsCount }
}
"""

ENROLL = """
mutation Enroll($studentId: ID!, $courseId: ID!) {
  enrollStudent(studentId: $studentId, courseId: $courseId) {
    id coursesCount courses { id code studentsCount students { id } }
  }
}
"""

UNENROLL = """
mutation Unenroll($studentId: ID!, $courseId: ID!) {
  unenrollStudent(studentId: $studentId, courseId: $courseId) { id coursesCount courses { id } }
}
"""

ALL_STUDENTS = """
query Students($filter: StudentFilter, $options: ListOptions) {
  getAllStudents(filter: $filter, options: $options) { id name age major coursesCount }
}
"""

ALL_COURSES = """
query Courses($filter: CourseFilter, $options: ListOptions) {
  getAllCourses(filter: $filter, options: $options) { id code title credits students { id name } }
}
"""


def _course_input(**fields):
    data = {"title": "Databases", "code": "CS305", "credits": 4, "instructor": "Dr. Codd"}
    data.update(fields)
    return data


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_json()["graphql"] == "/graphql"


def test_explorer_is_served_on_get(client):
    response = client.get("/graphql")
    assert response.status_code == 200
    assert response.mimetype == "text/html"


def test_non_json_body_is_rejected(client):
    response = client.post("/graphql", data="query { x }", content_type="text/plain")
    assert response.status_code == 400


def test_signup_and_login_flow(client):
    _, body = run_graphql(
        client, 'mutation { signup(email: "a@b.com", password: "secret1") { token user { id email } } }'
    )
    user = body["data"]["signup"]["user"]
    assert user["email"] == "a@b.com"

    _, body = run_graphql(
        client, 'mutation { login(email: "A@B.com", password: "secret1") { token user { id email } } }'
    )
    assert body["data"]["login"]["user"] == user
    token = body["data"]["login"]["token"]

    _, body = run_graphql(client, ADD_COURSE, {"input": _course_input()}, token=token)
    assert body["data"]["addCourse"]["code"] == "CS305"

    _, body = run_graphql(client, 'mutation { login(email: "a@b.com", password: "wrong") { token } }')
    assert body["data"] is None
    assert error_messages(body) == ["Invalid password"]


def test_mongo_identity_backend_survives_restart(mongo_client, collections):
    config = dict(TEST_CONFIG, IDENTITY_BACKEND="mongo")
    first = create_app(config_overrides=config, mongo_client=mongo_client).test_client()

    _, body = run_graphql(
        first, 'mutation { signup(email: "ada@b.com", password: "secret1") { token user { id email } } }'
    )
    user = body["data"]["signup"]["user"]

    restarted = create_app(config_overrides=config, mongo_client=mongo_client).test_client()
    _, body = run_graphql(
        restarted, 'mutation { login(email: "ADA@b.com", password: "secret1") { token user { id email } } }'
    )
    assert body["data"]["login"]["user"] == user

    _, body = run_graphql(restarted, ADD_COURSE, {"input": _course_input()}, token=body["data"]["login"]["token"])
    assert body["data"]["addCourse"]["code"] == "CS305"
    assert collections["users"].count_documents({}) == 1


def test_signup_validation_messages(client):
    _, body = run_graphql(client, 'mutation { signup(email: "ab.com", password: "secret1") { token } }')
    assert error_messages(body) == ["Invalid email"]
    _, body = run_graphql(client, 'mutation { signup(email: "a@b.com", password: "short") { token } }')
    assert error_messages(body) == ["Password too short"]


def test_mutation_without_token_is_rejected_and_changes_nothing(client, gql):
    _, body = run_graphql(client, ADD_COURSE, {"input": _course_input()})
    assert body["data"] is None
    assert error_messages(body) == ["UNAUTHENTICATED"]

    _, body = run_graphql(client, ADD_COURSE, {"input": _course_input()}, token="garbage")
    assert error_messages(body) == ["UNAUTHENTICATED"]

    assert gql(ALL_COURSES)["data"]["getAllCourses"] == []


def test_every_guarded_mutation_requires_a_token(client):
    operations = [
        'mutation { addStudent(input: {name: "x", email: "x@y.z", age: 20}) { id } }',
        'mutation { updateStudent(id: "1", input: {name: "x"}) { id } }',
        'mutation { deleteStudent(id: "1") }',
        'mutation { addCourse(input: {title: "t", code: "c", credits: 1, instructor: "i"}) { id } }',
        'mutation { updateCourse(id: "1", input: {title: "t"}) { id } }',
        'mutation { deleteCourse(id: "1") }',
        'mutation { enrollStudent(studentId: "1", courseId: "2") { id } }',
        'mutation { unenrollStudent(studentId: "1", courseId: "2") { id } }',
    ]
    for operation in operations:
        _, body = run_graphql(client, operation)
        assert error_messages(body) == ["UNAUTHENTICATED"], operation


def test_add_course_credit_bounds(gql):
    body = gql(ADD_COURSE, {"input": _course_input(code="BIO7", credits=7)})
    assert error_messages(body) == ["Credits must be between 1 and 6"]

    body = gql(ADD_COURSE, {"input": _course_input(code="BIO6", credits=6)})
    assert body["data"]["addCourse"]["credits"] == 6
    assert body["data"]["addCourse"]["studentsCount"] == 0


def test_add_student_validation_over_graphql(gql):
    body = gql(ADD_STUDENT, {"input": {"name": "Kid", "email": "kid@campus.edu", "age": 15}})
    assert error_messages(body) == ["Student must be >= 16"]

    gql(ADD_STUDENT, {"input": {"name": "Ada", "email": "ada@campus.edu", "age": 20}})
    body = gql(ADD_STUDENT, {"input": {"name": "Ada 2", "email": "ADA@campus.edu", "age": 21}})
    assert error_messages(body) == ["Email already exists"]


def test_age_range_filter(gql):
    for age in (25, 18, 17, 20, 19, 21):
        gql(ADD_STUDENT, {"input": {"name": f"S{age}", "email": f"s{age}@campus.edu", "age": age}})

    body = gql(ALL_STUDENTS, {"filter": {"minAge": 18, "maxAge": 20}})

    ages = sorted(s["age"] for s in body["data"]["getAllStudents"])
    assert ages == [18, 19, 20]


def test_string_filters_and_sorting(gql):
    gql(ADD_STUDENT, {"input": {"name": "Alan Turing", "email": "alan@campus.edu", "age": 22, "major": "CS"}})
    gql(ADD_STUDENT, {"input": {"name": "Ada Lovelace", "email": "ada@campus.edu", "age": 27, "major": "Maths"}})
    gql(ADD_STUDENT, {"input": {"name": "Grace Hopper", "email": "grace@navy.mil", "age": 30, "major": "CS"}})

    body = gql(ALL_STUDENTS, {"filter": {"nameContains": "LOVE"}})
    assert [s["name"] for s in body["data"]["getAllStudents"]] == ["Ada Lovelace"]

    body = gql(ALL_STUDENTS, {"filter": {"major": "CS"}, "options": {"sortBy": "age", "sortOrder": "DESC"}})
    assert [s["name"] for s in body["data"]["getAllStudents"]] == ["Grace Hopper", "Alan Turing"]

    body = gql(ALL_STUDENTS, {"filter": {"emailContains": "campus"}, "options": {"sortBy": "name"}})
    assert [s["name"] for s in body["data"]["getAllStudents"]] == ["Ada Lovelace", "Alan Turing"]


def test_course_code_prefix_filter(gql):
    gql(ADD_COURSE, {"input": _course_input(code="CS101", title="Intro")})
    gql(ADD_COURSE, {"input": _course_input(code="MATH101", title="Calculus CS-free")})
    gql(ADD_COURSE, {"input": _course_input(code="cs202", title="Systems")})

    body = gql(ALL_COURSES, {"filter": {"codePrefix": "CS"}, "options": {"sortBy": "title"}})

    assert [c["code"] for c in body["data"]["getAllCourses"]] == ["CS101", "cs202"]


def test_results_never_exceed_fifty(gql, collections):
    collections["students"].insert_many([
        {"name": f"Bulk {i}", "email": f"bulk{i}@campus.edu", "age": 20, "major": "", "courses": []}
        for i in range(60)
    ])

    assert len(gql(ALL_STUDENTS)["data"]["getAllStudents"]) == 10
    for limit in (50, 51, 1000):
        body = gql(ALL_STUDENTS, {"options": {"limit": limit}})
        assert len(body["data"]["getAllStudents"]) == 50
    body = gql(ALL_STUDENTS, {"options": {"limit": 50, "offset": 55}})
    assert len(body["data"]["getAllStudents"]) == 5


def test_enroll_and_unenroll_over_graphql(gql):
    student = gql(ADD_STUDENT, {"input": {"name": "Ada", "email": "ada@campus.edu", "age": 20}})["data"]["addStudent"]
    course = gql(ADD_COURSE, {"input": _course_input()})["data"]["addCourse"]
    ids = {"studentId": student["id"], "courseId": course["id"]}

    enrolled = gql(ENROLL, ids)["data"]["enrollStudent"]
    again = gql(ENROLL, ids)["data"]["enrollStudent"]

    assert enrolled == again
    assert enrolled["coursesCount"] == 1
    assert enrolled["courses"][0]["code"] == "CS305"
    assert enrolled["courses"][0]["students"] == [{"id": student["id"]}]

    courses = gql(ALL_COURSES)["data"]["getAllCourses"]
    assert courses[0]["students"] == [{"id": student["id"], "name": "Ada"}]

    unenrolled = gql(UNENROLL, ids)["data"]["unenrollStudent"]
    assert unenrolled == {"id": student["id"], "coursesCount": 0, "courses": []}
    assert gql(ALL_COURSES)["data"]["getAllCourses"][0]["students"] == []

    # Second unenroll is a no-op
    assert gql(UNENROLL, ids)["data"]["unenrollStudent"]["coursesCount"] == 0


def test_enroll_unknown_ids(gql):
    body = gql(ENROLL, {"studentId": "000000000000000000000000", "courseId": "nope"})
    assert error_messages(body) == ["Student or course not found"]


def test_update_and_delete_over_graphql(gql):
    student = gql(ADD_STUDENT, {"input": {"name": "Ada", "email": "ada@campus.edu", "age": 20}})["data"]["addStudent"]
    course = gql(ADD_COURSE, {"input": _course_input()})["data"]["addCourse"]
    gql(ENROLL, {"studentId": student["id"], "courseId": course["id"]})

    body = gql(
        'mutation($id: ID!) { updateStudent(id: $id, input: {major: "Maths"}) { name major } }',
        {"id": student["id"]},
    )
    assert body["data"]["updateStudent"] == {"name": "Ada", "major": "Maths"}

    body = gql('mutation($id: ID!) { updateCourse(id: $id, input: {credits: 5}) { code credits } }', {"id": course["id"]})
    assert body["data"]["updateCourse"] == {"code": "CS305", "credits": 5}

    body = gql('mutation { updateCourse(id: "000000000000000000000000", input: {credits: 5}) { id } }')
    assert error_messages(body) == ["Course not found"]

    assert gql('mutation($id: ID!) { deleteCourse(id: $id) }', {"id": course["id"]})["data"]["deleteCourse"] is True
    assert gql(ALL_STUDENTS)["data"]["getAllStudents"][0]["coursesCount"] == 0
    assert gql('mutation($id: ID!) { deleteCourse(id: $id) }', {"id": course["id"]})["data"]["deleteCourse"] is False

    assert gql('mutation($id: ID!) { deleteStudent(id: $id) }', {"id": student["id"]})["data"]["deleteStudent"] is True
    assert gql(ALL_STUDENTS)["data"]["getAllStudents"] == []


def test_unexpected_errors_are_not_leaked(gql, services, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("connection string mongodb://user:pw@host leaked")

    monkeypatch.setattr(services.students, "list_students", explode)

    body = gql(ALL_STUDENTS)

    assert error_messages(body) == ["Server error"]
    assert "extensions" not in body["errors"][0]


def test_syntax_errors_keep_their_message(client):
    status, body = run_graphql(client, "query { getAllStudents { id ")
    assert status == 400
    assert body["errors"][0]["message"].startswith("Syntax Error")
