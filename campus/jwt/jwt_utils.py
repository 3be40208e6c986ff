from datetime import timedelta
from typing import Dict, Optional

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from campus.logging_logs.log_config import get_logger

logger = get_logger("jwt")

BEARER_PREFIX = "Bearer "


class TokenService:
    """Signs caller identities into bearer tokens and resolves them back"""

    def __init__(self, expires_days: int = 7):
        self.expires_delta = timedelta(days=expires_days)

    def issue(self, identity: Dict) -> str:
        """Generate JWT access token for an identity ({id, email})"""
        additional_claims = {
            "id": identity.get("id"),
            "email": identity.get("email"),
        }

        return create_access_token(
            identity=str(identity.get("id")),
            expires_delta=self.expires_delta,
            additional_claims=additional_claims,
            fresh=False
        )

    def resolve(self, auth_header: Optional[str]) -> Optional[Dict]:
        """
        Resolve an Authorization header value into {id, email}.

        Missing, malformed, tampered and expired tokens all give None.
        """
        if not auth_header:
            return None

        token = auth_header
        if token.startswith(BEARER_PREFIX):
            token = token[len(BEARER_PREFIX):]
        token = token.strip()
        if not token:
            return None

        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException) as e:
            logger.debug(f"Rejected bearer token: {type(e).__name__}")
            return None

        return {
            "id": claims.get("id", claims.get("sub")),
            "email": claims.get("email"),
        }
