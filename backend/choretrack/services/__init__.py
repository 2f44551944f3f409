"""Service Layer — async orchestration of core decisions and store IO.

Invariants:
    - Services never contain recurrence or transition rules (those live in core/)
    - Store collaborators injected through core/repository_protocols.py
"""
