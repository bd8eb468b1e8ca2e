# inventory/__init__.py
"""
Inventory app - warehouses, stocked items and the stock movement ledger.
"""
