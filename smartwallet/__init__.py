"""
SmartWallet - Source Package

A personal-finance helper that keeps a user's payment cards and
recommends which card to use for a given purchase.

DESIGN PRINCIPLES:
1. The store is the only owner of card records
2. Fail early, fail visibly (no partial writes)
3. Recommendations are deterministic and explainable
4. Every write and every recommendation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "SmartWallet Team"
