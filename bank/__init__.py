"""
Bank - Source Package

A small banking domain model: one account tied to one owner,
with PIN-gated withdrawals and a readable account summary.

DESIGN PRINCIPLES:
1. Validate at construction, never later
2. Failures are reported, never silently corrected
3. Every withdrawal attempt is auditable
"""

__version__ = "1.0.0"
__author__ = "Bank Team"
