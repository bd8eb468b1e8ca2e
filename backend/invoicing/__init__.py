# invoicing/__init__.py
"""
Invoicing app - customer invoices and their totals.
"""
