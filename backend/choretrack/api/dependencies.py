"""API Dependencies — process-wide ChoreService for route injection.

Invariants:
    - init_chore_service called once from the lifespan before serving requests
    - Tests replace get_chore_service via app.dependency_overrides
"""

from choretrack.services.chore_service import ChoreService

# Singleton (initialized on startup)
chore_service: ChoreService | None = None


def init_chore_service(service: ChoreService) -> None:
    global chore_service
    chore_service = service


def get_chore_service() -> ChoreService:
    """FastAPI dependency for the chore service."""
    if not chore_service:
        raise RuntimeError("Chore service not initialized")
    return chore_service
