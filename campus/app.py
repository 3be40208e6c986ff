from datetime import timedelta
from typing import Any, Dict, Optional

import click
from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_restful import Api

from campus.api.graphql_api import GraphQLAPI, HealthCheck
from campus.config.settings import build_config
from campus.db.db_utils import ensure_indexes, get_collections, get_mongo_client
from campus.logging_logs.log_config import get_logger, setup_logging
from campus.services.service_container import ServiceContainer

logger = get_logger("app")


class CampusFlask(Flask):
    def __init__(self, *args, config_overrides: Optional[Dict[str, Any]] = None,
                 mongo_client=None, identity_store=None, **kwargs):
        super().__init__(*args, **kwargs)

        self.campus_config = build_config(config_overrides)
        setup_logging(
            level=self.campus_config["LOG_LEVEL"],
            log_dir=self.campus_config["LOG_DIR"],
            log_to_file=self.campus_config["LOG_TO_FILE"],
        )

        self.client = mongo_client or get_mongo_client(self.campus_config["DB_URL"])
        self.db = self.client[self.campus_config["DB_NAME"]]
        self.collections = get_collections(self.db, self.campus_config)
        ensure_indexes(self.collections)

        self.services = ServiceContainer(
            self.campus_config,
            self.collections,
            client=self.client,
            identity_store=identity_store,
        )

        if not self.campus_config["MONGO_USE_TRANSACTIONS"]:
            logger.warning(
                "MONGO_USE_TRANSACTIONS is off: enrollment writes to students and courses "
                "are not atomic; run `flask reconcile-enrollments` to repair one-sided relations"
            )
        if self.campus_config["IDENTITY_BACKEND"] == "memory":
            logger.warning("Identity store is in memory: signed-up users are lost on restart")

    def add_api(self):
        api = Api(self, catch_all_404s=True)
        api.add_resource(HealthCheck, "/")
        api.add_resource(GraphQLAPI, "/graphql", resource_class_kwargs={"services": self.services})

    def add_cli(self):
        @self.cli.command("reconcile-enrollments")
        def reconcile_enrollments():
            """Repair one-sided student/course relations."""
            report = self.services.enrollment.reconcile()
            click.echo(
                f"students repaired: {report['studentsRepaired']}, "
                f"courses repaired: {report['coursesRepaired']}, "
                f"dangling ids removed: {report['danglingRemoved']}"
            )


def create_app(config_overrides: Optional[Dict[str, Any]] = None, mongo_client=None,
               identity_store=None) -> CampusFlask:
    app = CampusFlask(
        __name__,
        config_overrides=config_overrides,
        mongo_client=mongo_client,
        identity_store=identity_store,
    )
    # Configure JWT
    app.config['JWT_SECRET_KEY'] = app.campus_config["JWT_SECRET_KEY"]
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(days=app.campus_config["JWT_ACCESS_TOKEN_EXPIRES_DAYS"])
    JWTManager(app)

    # Initialize API routes
    app.add_api()
    app.add_cli()
    CORS(app, supports_credentials=True)

    logger.info(f"Campus API ready, database '{app.campus_config['DB_NAME']}'")
    return app


if __name__ == '__main__':
    application = create_app()
    application.run(host="0.0.0.0", port=application.campus_config["PORT"])
