"""Infrastructure Layer — database sessions, repositories, logging.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Only layer that talks to SQLAlchemy engines directly

Design Decisions:
    - Imperative shell: all IO lives here, core stays pure
"""
