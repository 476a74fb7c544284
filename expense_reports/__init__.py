"""
Expense Reports - Source Package

A small expense recorder and report exporter backed by a
Firebase Realtime Database.

DESIGN PRINCIPLES:
1. Validate locally before touching the network
2. Fail early, fail visibly (one toast, no silent retries)
3. Every step is logged
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Reports Team"
