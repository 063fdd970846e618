import argparse
import asyncio
from bizhub.database import db
from bizhub.ledger.balance import BalanceLedger
from bizhub.ledger.effects import build_sign_table
from bizhub.config import settings

async def repair_balances(tenant_id: str, party_id: str = None, reset_counter: bool = False):
    ledger = BalanceLedger(db.parties, db.documents,
                           signs=build_sign_table(settings.EXPENSE_BALANCE_SIGN))

    if party_id:
        party_ids = [party_id]
    else:
        cursor = db.parties.collection.find({"tenant_id": tenant_id}, {"party_id": 1})
        party_ids = [doc["party_id"] for doc in await cursor.to_list(length=None)]

    print(f"Recomputing {len(party_ids)} party balance(s) for {tenant_id}")
    for pid in party_ids:
        before = await db.parties.get(tenant_id, pid)
        party = await ledger.recompute(tenant_id, pid, reset_counter=reset_counter)
        marker = "" if before.balance == party.balance else "  (repaired)"
        print(f"  {pid}: {before.balance} -> {party.balance}{marker}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Recompute party balances from their documents")
    parser.add_argument("--tenant", type=str, required=True, help="Tenant phone number")
    parser.add_argument("--party", type=str, help="Only repair this party")
    parser.add_argument("--reset-counter", action="store_true", help="Also rebuild total_transactions")
    args = parser.parse_args()

    db.connect()
    try:
        asyncio.run(repair_balances(args.tenant, args.party, args.reset_counter))
    finally:
        db.close()
