"""
EstateHub marketplace API.
"""
