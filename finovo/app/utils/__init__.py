"""
Utility functions for Finovo.

This package contains:
- financial_math: SIP, EMI, retirement and goal calculators
- budget_math: 50/30/20 analysis and dashboard aggregates
- decimal_utils: Decimal coercion and money precision handling
- datetime_utils: UTC clock and calendar month helpers
"""
