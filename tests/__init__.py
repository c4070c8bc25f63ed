"""
Test Suite for Bookshelf API

Test Organization:
- conftest.py: Shared fixtures (test database, cache, client, sample data)
- test_authors.py / test_books.py: /api/authors and /api/books endpoints
- test_auth.py: login and the administrator guard
- test_cache.py: tag-aware cache and its backends
- test_serializer.py: group and version filtering
- test_repository.py: paging and lookups
- test_validation.py: payload constraints and violation lists
- test_versioning.py: Accept header negotiation

Running Tests:
    pytest
    pytest tests/test_books.py -v
"""
