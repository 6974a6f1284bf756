# account_api/core/auth.py
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from account_api.core.config import Settings, get_app_settings
from account_api.core.errors import GENERIC_ERROR
from account_api.core.security import CredentialService, InvalidTokenError
from account_api.schemas.user import TokenClaims

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => we raise our own 401 for a missing header instead
#   of the scheme's default response.
bearer_scheme = HTTPBearer(auto_error=False)


def get_credential_service(
    settings: Settings = Depends(get_app_settings),
) -> CredentialService:
    """Build the credential service from the injected settings."""
    return CredentialService.from_settings(settings)


def require_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> TokenClaims:
    """
    Enforce a valid bearer token.

    Flow:
      1. No Authorization header (or not "Bearer") => 401.
      2. Verify signature + expiry => claims.
      3. Any verification failure => 401 with a generic message.
      4. No signing secret configured => 500.

    Returns:
        TokenClaims embedded in the token. The database is not consulted.

    Raises:
        HTTPException(401): missing, invalid or expired token.
        HTTPException(500): JWT_SECRET is not configured.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return credential_service.verify_token(credentials.credentials)
    except RuntimeError:
        logger.exception("Token verification unavailable")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_ERROR,
        )
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
