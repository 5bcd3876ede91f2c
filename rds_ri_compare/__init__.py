"""
RDS RI Compare.

Compares On-Demand and Reserved Instance pricing for running RDS instances.
"""
