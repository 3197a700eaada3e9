"""Infrastructure layer — durable storage for squares.

The service layer bridges between domain models and infrastructure.
"""
