"""TravelSage: travel planning backend"""
