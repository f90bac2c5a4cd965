# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Reels API:
# - test_api.py: HTTP tests for every endpoint (TestClient)
# - test_auth.py: Password hashing, tokens and credential validation
# - test_config.py: Settings validation (production secret, aliases)
# - test_rate_limit.py: Sliding window rate limiter
# - test_services.py: Store wrapper, services and local storage
# - test_utils.py: Stored filename generation
#
# Run tests with: poetry run pytest
# =============================================================================
