import pytest
from fastapi import HTTPException
from bizhub.errors import ValidationError
from bizhub.tenancy import get_tenant, validate_tenant_id

@pytest.mark.parametrize("raw,expected", [
    ("9876543210", "9876543210"),
    ("+44 7700 900123", "+447700900123"),
    ("(555) 123-4567", "5551234567"),
])
def test_valid_tenant_keys(raw, expected):
    assert validate_tenant_id(raw) == expected

@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12", "1234567890123456789"])
def test_invalid_tenant_keys(raw):
    with pytest.raises(ValidationError):
        validate_tenant_id(raw)

def test_dependency_maps_to_400():
    with pytest.raises(HTTPException) as exc:
        get_tenant(None)
    assert exc.value.status_code == 400
