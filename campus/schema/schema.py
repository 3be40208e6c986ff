"""
GraphQL Schema

Creates the executable Ariadne schema for the campus API.
Field and argument names are snake_cased on the Python side.
"""
from ariadne import make_executable_schema

from campus.schema.resolvers import course_type, mutation, query, student_type
from campus.schema.type_defs import type_defs

schema = make_executable_schema(
    type_defs,
    query,
    mutation,
    student_type,
    course_type,
    convert_names_case=True,
)
