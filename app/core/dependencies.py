from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.db.session import SessionLocal
from app.core.jwt import decode_token
from app.rules.catalog import RateCatalog, build_default_catalog
from app.rules.validator import SelectionValidator

security = HTTPBearer()

_catalog = None


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_catalog() -> RateCatalog:
    global _catalog
    if _catalog is None:
        _catalog = build_default_catalog()
    return _catalog


def require_admin(credentials: HTTPAuthorizationCredentials = Depends(security)) -> str:
    """Return the admin e-mail carried by the bearer token."""
    payload = decode_token(credentials.credentials)

    if payload["role"] != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admins only"
        )

    return payload["sub"]


def get_validator(catalog: RateCatalog = Depends(get_catalog)) -> SelectionValidator:
    return SelectionValidator(catalog)
