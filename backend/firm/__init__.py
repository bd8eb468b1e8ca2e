# firm/__init__.py
"""
Firm app - firm profile, security and display preferences.
"""
