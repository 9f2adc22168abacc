"""
Integration tests against a live Redis.

Enabled with USE_REAL_REDIS=1; REDIS_HOST/REDIS_PORT select the server.
"""
