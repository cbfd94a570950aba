"""
Relay Backend.

FastAPI application that accepts composed invoice messages and forwards
them to the Telegram Bot API.
"""
