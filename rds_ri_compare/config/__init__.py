"""
Configuration loading for RDS RI Compare.
"""
