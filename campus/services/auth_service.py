"""
Auth Service
Signup and login against the identity store, token issuance
"""
from typing import Dict

import bcrypt

from campus.config.settings import MIN_PASSWORD_LENGTH
from campus.exceptions.exceptions import InvalidCredentialsError, NotFoundError, ValidationError
from campus.jwt.jwt_utils import TokenService
from campus.logging_logs.log_config import get_logger
from campus.utils.validation.input_validator import InputValidator

logger = get_logger("services.auth")


class AuthService:
    def __init__(self, identity_store, token_service: TokenService, bcrypt_rounds: int = 10):
        self.identity_store = identity_store
        self.token_service = token_service
        self.bcrypt_rounds = bcrypt_rounds

    def signup(self, email: str, password: str) -> Dict:
        """Create an identity and return {token, user}"""
        if self.identity_store.find_by_email(email):
            raise ValidationError("Email already exists")
        if "@" not in email:
            raise ValidationError("Invalid email")
        InputValidator.validate_password(password, MIN_PASSWORD_LENGTH)

        hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=self.bcrypt_rounds)).decode('utf-8')
        identity = self.identity_store.create(email, hashed)
        logger.info(f"Signup for identity {identity['id']}")

        return self._auth_payload(identity)

    def login(self, email: str, password: str) -> Dict:
        """Check credentials and return {token, user}"""
        identity = self.identity_store.find_by_email(email)
        if not identity:
            raise NotFoundError("User not found")

        if not bcrypt.checkpw(password.encode('utf-8'), identity["passwordHash"].encode('utf-8')):
            logger.info(f"Failed login for identity {identity['id']}")
            raise InvalidCredentialsError("Invalid password")

        return self._auth_payload(identity)

    def _auth_payload(self, identity: Dict) -> Dict:
        # Public view only, the hash never leaves the service
        user = {"id": identity["id"], "email": identity["email"]}
        return {"token": self.token_service.issue(user), "user": user}
