"""Shared fixtures: a Flask app on a mongomock database and GraphQL helpers."""
import mongomock
import pytest

from campus.app import create_app

TEST_CONFIG = {
    "DB_NAME": "campus_test",
    "JWT_SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
    "JWT_ACCESS_TOKEN_EXPIRES_DAYS": 7,
    "IDENTITY_BACKEND": "memory",
    "MONGO_USE_TRANSACTIONS": False,
    "BCRYPT_ROUNDS": 4,
    "LOG_TO_FILE": False,
    "LOG_LEVEL": "WARNING",
}


def run_graphql(client, query, variables=None, token=None):
    """POST a GraphQL operation and return (status_code, json body)"""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = client.post(
        "/graphql",
        json={"query": query, "variables": variables or {}},
        headers=headers,
    )
    return response.status_code, response.get_json()


def error_messages(body):
    return [error["message"] for error in body.get("errors", [])]


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(mongo_client):
    app = create_app(config_overrides=dict(TEST_CONFIG), mongo_client=mongo_client)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return app.services


@pytest.fixture
def collections(app):
    return app.collections


@pytest.fixture
def token(client):
    _, body = run_graphql(
        client,
        'mutation { signup(email: "admin@campus.edu", password: "secret1") { token } }',
    )
    return body["data"]["signup"]["token"]


@pytest.fixture
def gql(client, token):
    """Run an authenticated GraphQL operation, returns the json body"""
    def _run(query, variables=None):
        _, body = run_graphql(client, query, variables, token=token)
        return body
    return _run


@pytest.fixture
def make_student(services):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        data = {
            "name": f"Student {counter['n']}",
            "email": f"student{counter['n']}@campus.edu",
            "age": 20,
        }
        data.update(fields)
        return services.students.add_student(data)
    return _make


@pytest.fixture
def make_course(services):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        data = {
            "title": f"Course {counter['n']}",
            "code": f"GEN{100 + counter['n']}",
            "credits": 3,
            "instructor": "Dr. Rivera",
        }
        data.update(fields)
        return services.courses.add_course(data)
    return _make
