"""
API Routers.

- health: liveness and detailed health checks
- relay: POST /api/send-telegram
"""
