"""Starlette integration: locale and CSRF cookies, middleware."""
