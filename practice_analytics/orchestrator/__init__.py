from .data_orchestrator import ReferenceDataOrchestrator

__all__ = ["ReferenceDataOrchestrator"]
