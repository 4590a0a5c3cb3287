"""Integration tests for customer credit accounts and adjustments"""

import pytest


@pytest.mark.asyncio
class TestCreditAccount:
    async def test_payment_charge_and_fee(self, ledger):
        """
        Given: New customer
        When: Payment 5000, charge 2000, fee 250
        Then: Balance 2750, lifetime earned 5000, spent 2250
        """
        payment = await ledger.payment(5000, "pay-1")
        charge = await ledger.charge(2000, "charge-1", order_id="ORD-7")
        fee = await ledger.charge(250, "fee-1", fee=True)

        assert payment.value.event_type == "payment"
        assert payment.value.program_id is None
        assert charge.value.event_type == "charge"
        assert fee.value.event_type == "fee"
        assert fee.value.new_balance == 2750

        balance = await ledger.balance(program_id=None)
        assert balance.value.current_balance == 2750
        assert balance.value.lifetime_earned == 5000
        assert balance.value.lifetime_spent == 2250

    async def test_charge_new_customer_rolls_back_account(self, ledger):
        result = await ledger.charge(100, "charge-new")

        assert result.error.code == "INSUFFICIENT_BALANCE"
        assert result.error.details["current_balance"] == 0
        assert await ledger.accounts() == []

    async def test_credit_and_loyalty_accounts_are_separate(self, ledger):
        await ledger.payment(1000, "pay")
        await ledger.accrue(200, "earn")

        accounts = await ledger.accounts()

        assert len(accounts) == 2
        assert {a.program_id for a in accounts} == {None, "prog_gold"}

    async def test_payment_rejected_on_inactive_account(self, ledger):
        paid = await ledger.payment(1000, "pay")
        await ledger.set_status(paid.value.account_id, False)

        result = await ledger.payment(500, "pay-2")

        assert result.error.code == "ACCOUNT_INACTIVE"
        assert (await ledger.balance(program_id=None)).value.current_balance == 1000


@pytest.mark.asyncio
class TestAdjustBalance:
    async def test_signed_adjustments(self, ledger):
        paid = await ledger.payment(1000, "pay")
        account_id = paid.value.account_id

        up = await ledger.adjust(account_id, 150, "adj-up")
        down = await ledger.adjust(account_id, -400, "adj-down")

        assert up.value.amount_change == 150
        assert down.value.amount_change == -400
        assert down.value.amount == 400
        balance = await ledger.balance(program_id=None)
        assert balance.value.current_balance == 750
        assert balance.value.lifetime_earned == 1000
        assert balance.value.lifetime_spent == 0

    async def test_adjustment_cannot_overdraw(self, ledger):
        paid = await ledger.payment(100, "pay")

        result = await ledger.adjust(paid.value.account_id, -101, "adj")

        assert result.error.code == "INSUFFICIENT_BALANCE"

    async def test_adjustment_sign_flip_on_same_key_conflicts(self, ledger):
        paid = await ledger.payment(100, "pay")
        await ledger.adjust(paid.value.account_id, -20, "adj")

        result = await ledger.adjust(paid.value.account_id, 20, "adj")

        assert result.error.code == "CONFLICT"

    async def test_unknown_account(self, ledger):
        result = await ledger.adjust(999, 10, "adj")

        assert result.error.code == "ACCOUNT_NOT_FOUND"
