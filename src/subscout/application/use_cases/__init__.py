from .resolve_identity import IdentityResolver, ResolutionState
from .scan_directory import ScanDirectoryUseCase, ScanResult

__all__ = [
    "IdentityResolver",
    "ResolutionState",
    "ScanDirectoryUseCase",
    "ScanResult",
]
