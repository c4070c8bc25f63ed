"""
Services Package

Business logic kept out of the routers:
- cache.py: Tag-aware read-through cache (memory or Redis backend)
- repository.py: Persistence gateway over SQLAlchemy sessions
- security.py: Password hashing and JWT utilities
- serializer.py: Group and version filtered serialization
- validation.py: Payload validation producing itemized violations
"""
