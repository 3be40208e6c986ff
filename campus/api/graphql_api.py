"""GraphQL endpoint - Presentation Layer (SoC)"""
from ariadne import graphql_sync
from ariadne.explorer import ExplorerGraphiQL
from flask import Response, current_app, request
from flask_restful import Resource

from campus.exceptions.error_handler import format_graphql_error
from campus.schema.schema import schema

explorer_html = ExplorerGraphiQL(title="Campus GraphQL").html(None)


class HealthCheck(Resource):
    def get(self):
        return {"message": "Campus GraphQL API is running", "graphql": "/graphql"}, 200


class GraphQLAPI(Resource):
    def __init__(self, services):
        self.services = services

    def get(self):
        """GraphiQL explorer"""
        return Response(explorer_html, status=200, mimetype="text/html")

    def post(self):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return {"errors": [{"message": "Request body must be a JSON object"}]}, 400

        success, result = graphql_sync(
            schema,
            data,
            context_value=self.build_context(),
            debug=current_app.debug,
            error_formatter=format_graphql_error,
        )
        return result, 200 if success else 400

    def build_context(self) -> dict:
        """Per-request context: caller identity plus the shared services"""
        return {
            "request": request,
            "user": self.services.tokens.resolve(request.headers.get("Authorization")),
            "services": self.services,
        }
