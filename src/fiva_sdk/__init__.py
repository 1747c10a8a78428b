"""FIVA SDK - Python client for the FIVA yield tokenization protocol on TON.

Split yield-bearing assets into principal (PT) and yield (YT) tokens, trade
them in the FIVA pool and redeem them, with messages signed by an external
TON wallet connector.
"""

from .base import FivaProtocolBase
from .constants import JettonOp, PoolOp, SYOp
from .exceptions import (
    FivaProtocolError,
    GetMethodError,
    InvalidAssetPairError,
    NetworkError,
    SubmissionError,
    UnresolvedAssetError,
    ValidationError,
)
from .retry import LoggingRetryObserver, RetryExecutor, RetryObserver, RetryPolicy, with_retries
from .ton import FivaClient, FivaClientConfig, ToncenterProvider
from .types import (
    AddressKind,
    Amount,
    ClaimableInterest,
    ContractAddresses,
    FeeEstimate,
    FivaAsset,
    MintOut,
    PoolBalances,
    PoolConfig,
    PoolType,
    QueryId,
    TransactionMessage,
    TransactionRequest,
)
from .utils import (
    fixed_apy,
    from_user_representation,
    generate_query_id,
    percentage_gain,
    sy_to_underlying,
    to_user_representation,
    underlying_to_sy,
)

__version__ = "0.1.0"

__all__ = [
    # Base classes
    "FivaProtocolBase",
    "FivaClient",
    "FivaClientConfig",
    "ToncenterProvider",
    # Retry
    "RetryPolicy",
    "RetryObserver",
    "RetryExecutor",
    "LoggingRetryObserver",
    "with_retries",
    # Types and enums
    "FivaAsset",
    "PoolType",
    "AddressKind",
    "ContractAddresses",
    "FeeEstimate",
    "PoolConfig",
    "PoolBalances",
    "MintOut",
    "ClaimableInterest",
    "TransactionMessage",
    "TransactionRequest",
    "Amount",
    "QueryId",
    "JettonOp",
    "SYOp",
    "PoolOp",
    # Exceptions
    "FivaProtocolError",
    "ValidationError",
    "UnresolvedAssetError",
    "InvalidAssetPairError",
    "NetworkError",
    "GetMethodError",
    "SubmissionError",
    # Utility functions
    "underlying_to_sy",
    "sy_to_underlying",
    "to_user_representation",
    "from_user_representation",
    "generate_query_id",
    "fixed_apy",
    "percentage_gain",
]
