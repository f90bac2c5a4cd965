# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the store-facing logic:
# - models/: Pydantic schemas for stored records
# - services/: Credential store, reel store and local video storage
#
# Routes in app/ call these services; services never build HTTP responses.
# =============================================================================
