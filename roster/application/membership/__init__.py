"""
Use cases for the membership bounded context.
"""
