"""
Core utilities shared across the servicedesk app.

This package hosts configuration (env vars, paths, feature flags) and the
cross-cutting helpers routers/services depend on: logging setup, CSRF
protection and the per-IP rate limiter.
"""
