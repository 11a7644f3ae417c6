"""Native bridge adapters."""

from nbfimport.services.bridge.acquisition import NativeAcquisitionAdapter
from nbfimport.services.bridge.base import NativeBridgeProtocol
from nbfimport.services.bridge.local import LocalShellBridge, check_csv_structure
from nbfimport.services.bridge.validator import RemoteCsvValidator

__all__ = [
    "NativeAcquisitionAdapter",
    "NativeBridgeProtocol",
    "LocalShellBridge",
    "check_csv_structure",
    "RemoteCsvValidator",
]
