"""
hms.routers - JSON API, one router per area
"""
