"""
Reference data consumed by the recommendation core.

Responsibilities:
- Describe the provider interface for categories and code books.
- Load the category catalogue and code values from CSV tables.
- Take a read-only snapshot of exactly what one request type needs.
"""
