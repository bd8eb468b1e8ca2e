# accounting/__init__.py
"""
Accounting app - double-entry bookkeeping for Ledgerbook.

This app provides:
- Account: Chart of Accounts
- JournalEntry: Balanced double-entry bookkeeping entries
- JournalLine: Debit/credit lines

Commands handle all mutations.
"""
