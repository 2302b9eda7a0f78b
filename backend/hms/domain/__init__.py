"""
hms.domain - pure booking rules, no I/O
"""
