"""
Core app: user accounts, authentication endpoints and health checks.
"""
