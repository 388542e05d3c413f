"""
Finance Tracker - Source Package

A local, single-user tracker for income and expenses.

DESIGN PRINCIPLES:
1. One explicit store owns the transactions
2. Every change is written through immediately
3. Totals are always recomputed, never cached
4. Invalid input never reaches storage
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
