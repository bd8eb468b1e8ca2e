# reports/__init__.py
"""
Reports app - pure report derivation over ledger snapshots.

No models of its own. Builders take snapshots from a LedgerRepository
and return dataclass view-models:
- builders.py: Profit & Loss, Balance Sheet, Trial Balance, Ledger
- dashboard.py: monthly metrics, recent entries, top customers
- exports.py: CSV / XLSX / TXT rendering
"""
