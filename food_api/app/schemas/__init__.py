"""
Pydantic schema definitions for API payloads.

Each domain defines its own request and response models here.
"""
