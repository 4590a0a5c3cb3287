"""Unit tests for ChargeCredit and RecordPayment use cases"""

import pytest
from unittest.mock import AsyncMock

from src.app.use_cases.ledger.charge_credit import ChargeCredit
from src.app.use_cases.ledger.dtos import ChargeCommandDTO, PaymentCommandDTO
from src.app.use_cases.ledger.record_payment import RecordPayment
from src.domain.ledger_event import LedgerEventType
from tests.fixtures.ledger_factory import make_account, make_outcome


@pytest.fixture
def charge_use_case(mock_uow, mock_resolver, mock_processor):
    return ChargeCredit(uow=mock_uow, resolver=mock_resolver, processor=mock_processor)


@pytest.fixture
def payment_use_case(mock_uow, mock_resolver, mock_processor):
    return RecordPayment(uow=mock_uow, resolver=mock_resolver, processor=mock_processor)


def charge_command(amount: int = 2000, fee: bool = False) -> ChargeCommandDTO:
    return ChargeCommandDTO(
        tenant_id="tenant_123",
        actor_id="user_42",
        customer_id="cust_001",
        amount=amount,
        fee=fee,
        idempotency_key="charge-1",
    )


@pytest.mark.asyncio
class TestChargeCredit:
    async def test_charge_debits_credit_account(self, charge_use_case, mock_uow, mock_resolver, mock_processor):
        account = make_account(program_id=None, balance=5000)
        mock_resolver.resolve = AsyncMock(return_value=(account, None))
        mock_processor.apply_mutation = AsyncMock(
            return_value=make_outcome(account, LedgerEventType.CHARGE, -2000)
        )

        result = await charge_use_case.execute(charge_command())

        assert result.is_ok()
        assert result.value.new_balance == 3000
        assert result.value.program_id is None
        mock_resolver.resolve.assert_called_once_with(
            "tenant_123", "cust_001", None, create_if_missing=True
        )
        mock_uow.commit.assert_called_once()

    async def test_fee_flag_records_fee(self, charge_use_case, mock_resolver, mock_processor):
        account = make_account(program_id=None, balance=5000)
        mock_resolver.resolve = AsyncMock(return_value=(account, None))
        mock_processor.apply_mutation = AsyncMock(
            return_value=make_outcome(account, LedgerEventType.FEE, -250)
        )

        result = await charge_use_case.execute(charge_command(amount=250, fee=True))

        assert result.value.event_type == "fee"
        args, _ = mock_processor.apply_mutation.call_args
        assert args[1:] == (LedgerEventType.FEE, -250)
        assert mock_processor.find_replay.call_args.args[2] == LedgerEventType.FEE

    async def test_new_customer_has_no_credit(self, charge_use_case, mock_uow, mock_resolver, mock_processor):
        """
        Given: Customer without a credit account
        When: Charging
        Then: INSUFFICIENT_BALANCE and nothing is committed
        """
        mock_resolver.resolve = AsyncMock(return_value=(make_account(program_id=None, balance=0), None))
        mock_processor.apply_mutation = AsyncMock()

        result = await charge_use_case.execute(charge_command())

        assert result.error.code == "INSUFFICIENT_BALANCE"
        mock_processor.apply_mutation.assert_not_called()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestRecordPayment:
    async def test_payment_credits_account(self, payment_use_case, mock_uow, mock_resolver, mock_processor):
        account = make_account(program_id=None, balance=0)
        mock_resolver.resolve = AsyncMock(return_value=(account, None))
        mock_processor.apply_mutation = AsyncMock(
            return_value=make_outcome(account, LedgerEventType.PAYMENT, 1500)
        )

        result = await payment_use_case.execute(
            PaymentCommandDTO(
                tenant_id="tenant_123",
                actor_id="user_42",
                customer_id="cust_001",
                amount=1500,
                idempotency_key="pay-1",
            )
        )

        assert result.is_ok()
        assert result.value.event_type == "payment"
        assert result.value.new_balance == 1500
        mock_uow.commit.assert_called_once()

    async def test_payment_on_inactive_account(self, payment_use_case, mock_uow, mock_resolver, mock_processor):
        mock_resolver.resolve = AsyncMock(return_value=(make_account(program_id=None, is_active=False), None))
        mock_processor.apply_mutation = AsyncMock()

        result = await payment_use_case.execute(
            PaymentCommandDTO(
                tenant_id="tenant_123",
                actor_id="user_42",
                customer_id="cust_001",
                amount=1500,
                idempotency_key="pay-2",
            )
        )

        assert result.error.code == "ACCOUNT_INACTIVE"
        mock_processor.apply_mutation.assert_not_called()
        mock_uow.commit.assert_not_called()
