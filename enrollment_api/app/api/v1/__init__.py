"""
Version 1 of the Enrollment API.

Breaking changes should be introduced in a new version subpackage
(e.g. ``v2``) to preserve backwards compatibility.
"""
