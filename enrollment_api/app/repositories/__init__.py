"""
Data access for enrollments and addresses.

Repositories own the SQL.  Services call them with plain dictionaries
and receive rows back as dictionaries, so the business logic never
touches a cursor directly.
"""
