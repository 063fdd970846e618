from scripts.verify_db_layer import has_tenant_key

def test_detects_unique_tenant_key():
    indexes = {
        "_id_": {"key": [("_id", 1)]},
        "tenant_id_1_document_id_1": {"key": [("tenant_id", 1), ("document_id", 1)], "unique": True},
    }
    assert has_tenant_key(indexes, "document_id")

def test_non_unique_or_wrong_field_is_not_enough():
    indexes = {
        "tenant_id_1_party_id_1": {"key": [("tenant_id", 1), ("party_id", 1)]},
        "tenant_id_1_sale_id_1": {"key": [("tenant_id", 1), ("sale_id", 1)], "unique": True},
    }
    assert not has_tenant_key(indexes, "party_id")
    assert not has_tenant_key(indexes, "summary_id")
