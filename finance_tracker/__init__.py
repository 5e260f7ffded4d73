"""
Personal Finance Tracker - Source Package

A command-line tool for recording income and expenses, listing and
filtering them, and producing balance summaries and monthly reports.

DESIGN PRINCIPLES:
1. Validate before anything is written
2. Fail early, fail visibly
3. No silent corrections
4. Every write is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Tracker Team"
