"""
External data sources for RDS RI Compare.

Fetches running instances and raw pricing data.
"""
