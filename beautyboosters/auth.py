import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from .config import JWT_ALGORITHM, JWT_AUDIENCE, SUPABASE_JWT_SECRET
from .database import get_db
from .models import ROLE_BOOSTER, ROLE_CUSTOMER, BoosterProfile, User, UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def verify_access_token(token: str) -> dict:
    """
    Verify an access token issued by the hosted auth provider.
    Tokens are HS256 signed with the project JWT secret and carry the
    user id in "sub".
    """
    if len(token.split(".")) != 3:
        logger.warning(f"⚠️ Malformed token received, length: {len(token)}")
        raise HTTPException(
            status_code=401, detail="Invalid token format. Expected a valid JWT token."
        )

    try:
        payload = jwt.decode(
            token,
            SUPABASE_JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        ) from e
    except JWTError as e:
        logger.warning(f"❌ Token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Token verification failed") from e

    if not payload.get("sub"):
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    return payload


def get_or_create_user(db: Session, claims: dict) -> User:
    """Find the user for the token subject, creating it on first sight"""
    user_id = claims["sub"]
    email = claims.get("email") or ""
    metadata = claims.get("user_metadata") or {}
    name = metadata.get("full_name") or metadata.get("name")

    user = db.query(User).filter(User.id == user_id).first()
    if user:
        return user

    logger.info(f"🆕 Creating new user: {email}")
    user = User(id=user_id, email=email, full_name=name, phone=claims.get("phone") or None)
    user.roles.append(UserRole(role=ROLE_CUSTOMER))
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        # Another request created the same user between the check and the insert
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer token"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    claims = verify_access_token(credentials.credentials)
    user = get_or_create_user(db, claims)
    logger.debug(f"✅ User authenticated: {user.email}")
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials = Depends(optional_security),
    db: Session = Depends(get_db),
):
    """Current user when a token is sent, None for guest checkouts"""
    if not credentials:
        return None
    claims = verify_access_token(credentials.credentials)
    return get_or_create_user(db, claims)


def require_roles(*roles: str):
    """
    Dependency factory restricting a route to users holding any of the roles.

    Example usage:
        @router.get("/admin/jobs")
        async def list_jobs(admin: User = Depends(require_roles("admin"))):
            ...
    """

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if not user.role_names.intersection(roles):
            logger.warning(f"⚠️ User {user.email} lacks role {roles} for protected route")
            raise HTTPException(status_code=403, detail="You do not have access to this resource")
        return user

    return role_checker


async def get_current_booster(
    user: User = Depends(require_roles(ROLE_BOOSTER)),
    db: Session = Depends(get_db),
) -> BoosterProfile:
    """Booster profile of the signed-in booster"""
    profile = db.query(BoosterProfile).filter(BoosterProfile.id == user.id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Booster profile not found")
    return profile
