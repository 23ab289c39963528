"""
Use cases for the servicedesk app.

Each service module orchestrates the key-value store to implement the
business rules (categories, services, bookings). Routers call these services
instead of reading or writing the store directly.
"""
