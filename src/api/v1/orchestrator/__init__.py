from src.api.v1.orchestrator.orchestrator_routes import router as orchestrator_router

__all__ = ["orchestrator_router"]
