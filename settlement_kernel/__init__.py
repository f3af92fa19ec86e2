"""
Settlement Kernel - group expense ledger domain

Pure domain layer for shared trip costs:
- Expense group aggregate with write-time validation
- Decimal-only amounts with boundary rounding
- Typed, coded exceptions
- Structured JSON logging
"""

__version__ = "0.1.0"
