"""
Application services.

Bridge between ORM models and the pure domain rules in `domain/`.
"""
