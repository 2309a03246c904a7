"""
Ledgerline - Source Package

A small command-line expense tracker that keeps every record in a
single local JSON document.

DESIGN PRINCIPLES:
1. Validate before anything touches disk
2. A broken or missing data file is an empty ledger, not a crash
3. Display order is always derived, never stored
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Ledgerline Team"
