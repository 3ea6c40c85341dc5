"""
ATM Core

A single-user teller transaction processor: authenticates a card holder,
checks the requested action against account state and applies the balance
mutations as atomic pairs.
"""

__version__ = "1.0.0"
