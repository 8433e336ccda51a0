# Resources package init
"""
Hub Foundation: Concrete Resources
===================================

What:  One module per resource type wiring model, accessor, transformer and
       controller together.
How:   Each module builds its accessor (with its scope registry) and its
       controller once at import; routes import the controller instances.

Resource Inventory:
    - artworks.py:  artwork_controller (+ scopes onView, publicDomain)
                    artist_artworks_controller (/artists/{id}/artworks)
    - artists.py:   artist_controller
"""
