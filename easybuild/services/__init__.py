# Services package init
"""
EasyBuild Content API - Services Layer
========================================

Service Inventory:
    - activation.py:      enforce_single_active(), sibling deactivation after
                          an active write of a single-active type
    - content_service.py: ContentService, CRUD and seeding for every
                          registered content type

Services take the database handle per call and raise the exceptions from
easybuild.exceptions; they never build HTTP responses.
"""
