"""
ATM Simulator

A console teller for a single PIN-protected account with deposits,
withdrawals, transaction history and static exchange rates. All monetary
math uses Decimal.
"""

__version__ = "1.0.0"
