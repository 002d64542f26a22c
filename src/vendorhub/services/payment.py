# SPDX-FileCopyrightText: 2025-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: vendorhub
"""
Payment collaborator.

No real gateway is integrated; ``SimulatedPaymentGateway`` waits and then
succeeds (or fails, when configured to).
"""

import asyncio
import uuid
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from vendorhub.domain import Plan
from vendorhub.errors import PaymentError
from vendorhub.logging import LoggerProtocol


class PaymentReceipt(BaseModel):
    reference: str
    plan_id: str
    amount: int
    paid_at: datetime


@runtime_checkable
class PaymentGateway(Protocol):
    async def charge(self, plan: Plan, payer_email: str) -> PaymentReceipt:
        """Charge the plan price.

        Raises:
            PaymentError: If the charge is declined or the gateway is unreachable
        """
        ...


class SimulatedPaymentGateway:
    """Stand-in gateway that resolves after ``delay`` seconds."""

    def __init__(
        self,
        logger: LoggerProtocol,
        delay: float = 2.0,
        should_fail: bool = False,
    ) -> None:
        self._logger = logger
        self.delay = delay
        self.should_fail = should_fail

    async def charge(self, plan: Plan, payer_email: str) -> PaymentReceipt:
        self._logger.info("Processing payment", plan=plan.id, amount=plan.price)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.should_fail:
            self._logger.warning("Payment declined", plan=plan.id)
            raise PaymentError(plan_id=plan.id.value)
        receipt = PaymentReceipt(
            reference=uuid.uuid4().hex,
            plan_id=plan.id.value,
            amount=plan.price,
            paid_at=datetime.now(UTC),
        )
        self._logger.info("Payment captured", plan=plan.id, reference=receipt.reference)
        return receipt
