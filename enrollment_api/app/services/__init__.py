"""
Service layer abstraction.

Services encapsulate business rules and talk to repositories and
external providers, so API handlers stay free of SQL and HTTP client
code.
"""
