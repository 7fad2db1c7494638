"""
NovaBank - Source Package

A personal-banking dashboard: balance, transaction history, a simulated
funds-transfer flow and an AI financial advisor.

DESIGN PRINCIPLES:
1. One account store per session, passed explicitly to whoever needs it
2. Validation failures are answers, not crashes
3. Nothing here moves real money
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "NovaBank Team"
