"""Re-export collaborator protocols from core for convenience."""

from __future__ import annotations

from logrouter.core.protocols import IApplicationTable, IObjectStore, IQueueClient

__all__ = ["IApplicationTable", "IObjectStore", "IQueueClient"]
