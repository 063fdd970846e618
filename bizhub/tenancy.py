import re
from typing import Optional

from fastapi import HTTPException, Query

from bizhub.errors import ValidationError

# Tenants are keyed by the owner's phone number
TENANT_KEY_PATTERN = re.compile(r"^\+?[0-9]{7,15}$")


def validate_tenant_id(tenant_id: Optional[str]) -> str:
    """Normalise and check a tenant key, raising ValidationError when unusable."""
    if tenant_id is None or not tenant_id.strip():
        raise ValidationError("Phone number is required")
    cleaned = re.sub(r"[\s\-()]", "", tenant_id)
    if not TENANT_KEY_PATTERN.match(cleaned):
        raise ValidationError(f"Invalid phone number: {tenant_id}")
    return cleaned


def get_tenant(phone: Optional[str] = Query(None, description="Tenant phone number")) -> str:
    """FastAPI dependency resolving the tenant key from the ?phone= query parameter."""
    try:
        return validate_tenant_id(phone)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
