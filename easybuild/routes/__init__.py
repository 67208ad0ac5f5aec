# Routes package init
"""
EasyBuild Content API - Routes Package
========================================

Route Inventory:
    - content.py: GET/POST       /content/{type}
                  POST           /content/{type}/seed
                  GET/PUT/DELETE /content/{type}/{id}
    - health.py:  GET            /health

Routes stay thin: resolve the content type, call ContentService, wrap the
result in the envelope. Errors propagate to the handlers in main.py.
"""
