# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Creative Showcase API:
# - fakes.py: In-memory Supabase stand-in used by every test
# - test_security.py, test_utils.py, test_models.py: Unit tests
# - test_*_service.py: Service tests against the fake store
# - test_api_*.py, test_health.py: Endpoint tests through TestClient
#
# Run tests with: pytest
# =============================================================================
