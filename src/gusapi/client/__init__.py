"""Transport clients for ``gusapi``."""

from .base import GusApiClient
from .soap import SoapGusApiClient

__all__ = ["GusApiClient", "SoapGusApiClient"]
