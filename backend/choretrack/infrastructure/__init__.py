"""Infrastructure Layer — database, snapshot feed and logging.

Invariants:
    - Infrastructure implements the core Protocols; core never imports it
    - All database failures mapped to TransportError
"""
