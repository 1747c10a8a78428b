"""TON implementation of the FIVA client."""

from .client import FivaClient
from .config import FivaClientConfig
from .connections import GetMethodProvider, StackReader, ToncenterProvider, WalletConnector
from .resolver import AddressResolver, ResolutionState

__all__ = [
    "FivaClient",
    "FivaClientConfig",
    "GetMethodProvider",
    "StackReader",
    "ToncenterProvider",
    "WalletConnector",
    "AddressResolver",
    "ResolutionState",
]
