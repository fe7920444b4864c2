"""
Service layer abstraction.

Each service encapsulates the business logic for a domain and talks
to storage, so API handlers stay free of persistence details.
"""
