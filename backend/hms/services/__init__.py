"""
hms.services - one service per area of the hotel, all writing through the gateway
"""
