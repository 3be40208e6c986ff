"""
GraphQL SDL exported as a Python string named type_defs.
The schema module imports this and binds the resolvers to it.
"""

type_defs = """
schema {
  query: Query
  mutation: Mutation
}

type User {
  id: ID!
  email: String!
}

type AuthPayload {
  token: String!
  user: User!
}

type Student {
  id: ID!
  name: String!
  email: String!
  age: Int!
  major: String!
  courses: [Course]
  coursesCount: Int!
}

type Course {
  id: ID!
  title: String!
  code: String!
  credits: Int!
  instructor: String!
  students: [Student]
  studentsCount: Int!
}

input StudentInput {
  name: String
  email: String
  age: Int
  major: String
}

input StudentUpdateInput {
  name: String
  email: String
  age: Int
  major: String
}

input CourseInput {
  title: String!
  code: String!
  credits: Int!
  instructor: String!
}

input CourseUpdateInput {
  title: String
  code: String
  credits: Int
  instructor: String
}

input ListOptions {
  limit: Int
  offset: Int
  sortBy: String
  sortOrder: String
}

input StudentFilter {
  major: String
  nameContains: String
  emailContains: String
  minAge: Int
  maxAge: Int
}

input CourseFilter {
  codePrefix: String
  titleContains: String
  instructor: String
  minCredits: Int
  maxCredits: Int
}

type Query {
  getAllStudents(filter: StudentFilter, options: ListOptions): [Student!]!
  getAllCourses(filter: CourseFilter, options: ListOptions): [Course!]!
}

type Mutation {
  # Auth
  signup(email: String!, password: String!): AuthPayload!
  login(email: String!, password: String!): AuthPayload!

  # Students
  addStudent(input: StudentInput!): Student!
  updateStudent(id: ID!, input: StudentUpdateInput!): Student!
  deleteStudent(id: ID!): Boolean!

  # Courses
  addCourse(input: CourseInput!): Course!
  updateCourse(id: ID!, input: CourseUpdateInput!): Course!
  deleteCourse(id: ID!): Boolean!

  # Enrollments
  enrollStudent(studentId: ID!, courseId: ID!): Student!
  unenrollStudent(studentId: ID!, courseId: ID!): Student!
}
"""
