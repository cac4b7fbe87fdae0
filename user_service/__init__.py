"""
User Service - registration, authentication and profile management.
"""
