"""
Invoice Relay Application.

- backend/: FastAPI relay backend, configuration, logging, error handling
- client/: HTTP client for the relay backend (httpx)
- form/: Invoice form state, validation, text assembly and event handlers
- telegram/: Telegram Bot API provider layer (outbound messages, sender)
"""
