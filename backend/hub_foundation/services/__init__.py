# Services package init
"""
Hub Foundation: Services Layer
===============================

What:  The generic read path shared by every resource type.
Why:   Routes handle HTTP, services handle lookup, validation and rendering.
How:   A ResourceController is constructed with its collaborators and holds
       no per-request state; concrete wiring lives in hub_foundation.resources.

Service Inventory:
    - ModelAccessor (abstract): Lookup, pagination and scope registry contract
    - SqlAlchemyModelAccessor: Implementation over one declarative model
    - Transformer: Record rendering, sparse fieldsets, response envelopes
    - ResourceController: show / index / show_scope / index_scope / show_multiple
"""
