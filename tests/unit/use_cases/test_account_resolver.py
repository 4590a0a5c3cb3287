"""Unit tests for AccountResolver

Tests cover:
- Locked lookup of an existing account
- Auto-creation when allowed
- NotFound for unknown customer / program
- AccountNotFound when creation is not allowed
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.ledger.account_resolver import AccountResolver
from src.app.use_cases.ledger.errors import AccountNotFoundError, NotFoundError
from tests.fixtures.ledger_factory import make_account, make_program


@pytest.fixture
def account_repo():
    return MagicMock()


@pytest.fixture
def customer_repo():
    repo = MagicMock()
    repo.exists = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def program_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_program())
    return repo


@pytest.fixture
def resolver(account_repo, customer_repo, program_repo):
    return AccountResolver(account_repo, customer_repo, program_repo)


@pytest.mark.asyncio
class TestResolveExisting:
    async def test_existing_account_is_locked_and_returned(self, resolver, account_repo):
        account = make_account(balance=150)
        account_repo.get_by_subject = AsyncMock(return_value=account)
        account_repo.create = AsyncMock()

        resolved, program = await resolver.resolve("tenant_123", "cust_001", "prog_gold", create_if_missing=True)

        assert resolved is account
        assert program.id == "prog_gold"
        account_repo.get_by_subject.assert_called_once_with(
            "tenant_123", "cust_001", "prog_gold", for_update=True
        )
        account_repo.create.assert_not_called()

    async def test_credit_account_skips_program_lookup(self, resolver, account_repo, program_repo):
        account_repo.get_by_subject = AsyncMock(return_value=make_account(program_id=None))

        _, program = await resolver.resolve("tenant_123", "cust_001", None, create_if_missing=True)

        assert program is None
        program_repo.get_by_id.assert_not_called()


@pytest.mark.asyncio
class TestResolveMissing:
    async def test_creates_zero_balance_account(self, resolver, account_repo):
        """
        Given: No account for (tenant, customer, program)
        When: Resolving with create_if_missing
        Then: A zero-balance active account is created
        """
        account_repo.get_by_subject = AsyncMock(return_value=None)

        async def assign_id(account):
            account.id = 7
            return account

        account_repo.create = AsyncMock(side_effect=assign_id)

        account, _ = await resolver.resolve("tenant_123", "cust_001", "prog_gold", create_if_missing=True)

        assert account.id == 7
        assert account.current_balance == 0
        assert account.is_active is True
        assert account.program_id == "prog_gold"

    async def test_missing_account_without_create(self, resolver, account_repo):
        account_repo.get_by_subject = AsyncMock(return_value=None)

        with pytest.raises(AccountNotFoundError):
            await resolver.resolve("tenant_123", "cust_001", "prog_gold", create_if_missing=False)

    async def test_unknown_customer(self, resolver, account_repo, customer_repo):
        account_repo.get_by_subject = AsyncMock(return_value=None)
        account_repo.create = AsyncMock()
        customer_repo.exists = AsyncMock(return_value=False)

        with pytest.raises(NotFoundError) as exc_info:
            await resolver.resolve("tenant_123", "ghost", "prog_gold", create_if_missing=True)

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.details["customer_id"] == "ghost"
        account_repo.create.assert_not_called()

    async def test_unknown_program(self, resolver, account_repo, program_repo):
        account_repo.get_by_subject = AsyncMock(return_value=None)
        account_repo.create = AsyncMock()
        program_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError) as exc_info:
            await resolver.resolve("tenant_123", "cust_001", "prog_x", create_if_missing=True)

        assert exc_info.value.details["program_id"] == "prog_x"
        account_repo.create.assert_not_called()


@pytest.mark.asyncio
class TestResolveById:
    async def test_missing_account(self, resolver, account_repo):
        account_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(AccountNotFoundError):
            await resolver.resolve_by_id("tenant_123", 99)

        account_repo.get_by_id.assert_called_once_with("tenant_123", 99, for_update=True)
