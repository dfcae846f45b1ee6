"""Core configuration, schemas and logging.

Contains:
- config.py: environment-driven settings for the service
- models_io.py: request/response schemas used across routers
- errors.py: domain exceptions raised by the content layer
- log_setup.py: console logging configuration
- access_log.py: daily access-log writer and client IP resolution
"""
