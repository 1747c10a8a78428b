"""Transaction dispatch helpers for the FIVA TON client."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from pytoniq_core import Address, Cell

from ..exceptions import SubmissionError, ValidationError
from ..types import TransactionMessage, TransactionRequest
from .config import DEFAULT_TTL
from .connections import WalletConnector
from .messages import MessageBody, encode_payload

logger = logging.getLogger(__name__)


class TransactionDispatcher:
    """Package encoded messages into a wallet request and hand it to the connector."""

    def __init__(
        self,
        connector: WalletConnector,
        *,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._connector = connector
        self._ttl = ttl
        self._clock = clock

    @staticmethod
    def build_message(
        address: Address, amount: int, body: MessageBody | Cell
    ) -> TransactionMessage:
        if amount < 0:
            raise ValidationError(
                "Attached amount cannot be negative", field="amount", value=amount
            )
        return TransactionMessage(
            address=address.to_str(),
            amount=amount,
            payload=encode_payload(body),
        )

    async def send(
        self,
        messages: Sequence[TransactionMessage],
        *,
        action: str,
        ttl: float | None = None,
    ) -> TransactionRequest:
        if not messages:
            raise ValidationError("At least one message is required", field="messages")

        valid_until = int(self._clock() + (self._ttl if ttl is None else ttl))
        request = TransactionRequest(valid_until=valid_until, messages=list(messages))
        logger.info(
            "Dispatching %s with %s message(s), valid until %s",
            action,
            len(request.messages),
            valid_until,
        )

        try:
            await self._connector.send_transaction(request.as_dict())
        except Exception as exc:
            raise SubmissionError(
                str(exc),
                action=action,
                message_count=len(request.messages),
                details={"error": str(exc), "valid_until": valid_until},
            ) from exc

        logger.info("Transaction submitted for action=%s", action)
        return request
