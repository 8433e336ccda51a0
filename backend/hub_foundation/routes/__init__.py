# Routes package init
"""
Hub Foundation: API Routes Package
===================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - artworks.py:  GET /api/v1/artworks
                    GET /api/v1/artworks/{id}
                    GET /api/v1/artworks/on-view[/{id}]
                    GET /api/v1/artworks/public-domain[/{id}]
    - artists.py:   GET /api/v1/artists
                    GET /api/v1/artists/{id}
                    GET /api/v1/artists/{id}/artworks
    - health.py:    GET /health

Design Principle:
    Routes are THIN. They build a RequestContext and call one controller
    operation. Validation, limits and rendering belong to ResourceController.
"""
