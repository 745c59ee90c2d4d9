"""Application services for materialising projects."""

from .hooks import HookInjector, patch
from .manifest import ManifestComposer, ManifestError
from .replicator import DirectoryReplicator
from .scaffold_service import (
    DestinationExistsError,
    ScaffoldError,
    ScaffoldResult,
    ScaffoldService,
    ScaffoldState,
)

__all__ = [
    "DestinationExistsError",
    "DirectoryReplicator",
    "HookInjector",
    "ManifestComposer",
    "ManifestError",
    "ScaffoldError",
    "ScaffoldResult",
    "ScaffoldService",
    "ScaffoldState",
    "patch",
]
