"""Color naming sources: the network service and the offline CSS table."""

from .client import ColorServiceClient, ColorServiceError
from .offline import OfflineColorNamer

__all__ = ["ColorServiceClient", "ColorServiceError", "OfflineColorNamer"]
