"""
Investment plan engine.

Plan catalog, plan instance lifecycle, wallet/bonus ledger and referral
commissions.
"""

__version__ = "0.1.0"
