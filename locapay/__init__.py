"""
LocaPay - Source Package

Utility-billing calculator for shared housing: tracks tenants, their
rent and their electricity meter readings, and splits one shared
electricity bill across tenants in proportion to what each consumed.

DESIGN PRINCIPLES:
1. Calculations are pure and deterministic
2. Validate fully, then mutate (never a partial update)
3. No silent corrections inside the core
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "LocaPay Team"
