"""
hms.models - enums, store tables and API schemas
"""
