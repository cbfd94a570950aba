"""
Backend Services.

Business logic invoked by API endpoints.
"""
