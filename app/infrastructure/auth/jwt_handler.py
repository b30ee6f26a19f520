"""
JWT token handler.
Issues and validates the bearer tokens carrying user, tenant and role.
"""

from typing import Optional, Dict, Any
from datetime import timedelta
from jose import JWTError, jwt as jose_jwt

from app.config import get_settings
from app.domain.models.base import ValidationError, utc_now


REQUIRED_CLAIMS = ("sub", "tenant_id", "role")


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        self.settings = get_settings()
        self.jwt_secret = secret or self.settings.jwt_secret_key
        self.jwt_algorithm = algorithm or self.settings.jwt_algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Raises:
            ValidationError: If the token is invalid, expired or lacks a required claim
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise ValidationError(f"Invalid JWT token: {str(e)}")

        for claim in REQUIRED_CLAIMS:
            if not payload.get(claim):
                raise ValidationError(f"Token missing {claim} claim")

        return payload

    def is_token_valid(self, token: str) -> bool:
        try:
            self.verify_token(token)
            return True
        except ValidationError:
            return False

    def create_token(
        self,
        user_id: str,
        tenant_id: str,
        role: str,
        email: Optional[str] = None,
        expires_minutes: Optional[int] = None
    ) -> str:
        """Issue a signed access token."""
        now = utc_now()
        expire = now + timedelta(minutes=expires_minutes or self.settings.jwt_access_token_expire_minutes)

        payload = {
            "sub": user_id,
            "tenant_id": tenant_id,
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        if email:
            payload["email"] = email

        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
