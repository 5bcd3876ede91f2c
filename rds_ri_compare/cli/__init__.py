"""
Command-line interface for RDS RI Compare.
"""
