"""Shopledger - bookkeeping for a small retail shop.

Customers, products, credit and cash sales, payments received and shop
expenses, kept as one ledger snapshot in SQLite.
"""

__version__ = "0.1.0"
