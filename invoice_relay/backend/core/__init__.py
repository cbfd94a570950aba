"""
Backend Core.

Configuration, logging, exceptions, exception handlers and middleware.
"""
