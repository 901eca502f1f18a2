"""
Bank Management

A small console banking system: customers, accounts, deposits and
withdrawals, persisted to a line-oriented text file between runs.
All balances use Decimal precision.
"""

__version__ = "1.0.0"
