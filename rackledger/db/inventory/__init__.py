"""
Inventory ledger.

Models:
- Inventory (quantity per item per location, never negative)
- Movement (append-only PLACEMENT/RETRIEVAL/TRANSFER records)
"""
