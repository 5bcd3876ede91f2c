"""
Core modules for RDS RI Compare.

This package contains the pricing normalization, cost calculation and
aggregation engine.
"""
