"""
Standard type definitions for database models.

Provides consistent types for percentage fields across all models.
"""

from sqlalchemy import DECIMAL

# Commission percentage
# Precision: 5 digits total, 2 after decimal point
# Range: 0.00 to 100.00 (enforced by validators)
PercentType = DECIMAL(5, 2)
