# parties/__init__.py
"""
Parties app - customers and vendors.
"""
