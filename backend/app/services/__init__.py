"""Services Layer — imperative shell orchestrating repositories around core logic.

Invariants:
    - Handlers depend on repository Protocols, never on AsyncSession directly
    - All business rules delegated to app.core (no arithmetic here)

Design Decisions:
    - One handler class per resource (rounds, projects, funding)
"""
