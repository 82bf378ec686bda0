# src/prover_cache/coordinator/__init__.py

from .listener import ClearCacheCoordinatorListener, Listener, ListenerHub
from .types import ProofFailureType, ProofStatus, SubmitProofRequest

__all__ = [
    "ClearCacheCoordinatorListener",
    "Listener",
    "ListenerHub",
    "ProofFailureType",
    "ProofStatus",
    "SubmitProofRequest",
]
