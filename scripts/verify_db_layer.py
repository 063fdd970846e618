import asyncio
import sys
from bizhub.database import db

def has_tenant_key(indexes: dict, id_field: str) -> bool:
    """True when some index enforces one row per (tenant_id, id_field)."""
    wanted = [("tenant_id", 1), (id_field, 1)]
    return any(
        info.get("unique") and [(field, int(direction)) for field, direction in info["key"]] == wanted
        for info in indexes.values()
    )

async def verify() -> bool:
    print("Connecting to database...")
    db.connect()
    ok = True

    try:
        await db.client.admin.command('ping')
        print("✅ Database connection successful (Ping)")

        for name in ("parties", "documents", "sales", "transactions"):
            repo = getattr(db, name)
            indexes = await repo.collection.index_information()
            if has_tenant_key(indexes, repo.id_field):
                print(f"✅ {name}: unique (tenant_id, {repo.id_field}) index present")
            else:
                print(f"❌ {name}: unique (tenant_id, {repo.id_field}) index missing, run scripts/init_db.py")
                ok = False
    finally:
        db.close()
    return ok

if __name__ == "__main__":
    sys.exit(0 if asyncio.run(verify()) else 1)
