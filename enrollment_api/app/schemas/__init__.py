"""
Pydantic schema definitions for API payloads.

Schemas are separated from database rows to decouple the API
representation from persistence: read models list exactly the fields
a client may see.
"""
