"""Account resolution

Locates, and when asked creates, the ledger account a mutation targets.
Must run inside the caller's unit of work so the row lock is held until commit.
"""

import logging
from typing import Optional, Tuple
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from src.app.repositories.loyalty_program_repository import LoyaltyProgramRepository
from src.domain.ledger_account import LedgerAccount
from src.domain.loyalty_program import LoyaltyProgram
from .errors import AccountNotFoundError, NotFoundError

logger = logging.getLogger(__name__)


class AccountResolver:
    """
    Resolve (tenant, customer, program) to a locked LedgerAccount

    Rules:
    1. The account row is read with SELECT FOR UPDATE
    2. Missing + create_if_missing: customer and program must exist for the tenant,
       then a zero-balance active account is inserted
    3. Missing otherwise: AccountNotFoundError
    4. The program is returned alongside so its policy is read in the same transaction
    """

    def __init__(
        self,
        account_repo: LedgerAccountRepository,
        customer_repo: CustomerRepository,
        program_repo: LoyaltyProgramRepository,
    ):
        self.account_repo = account_repo
        self.customer_repo = customer_repo
        self.program_repo = program_repo

    async def resolve(
        self,
        tenant_id: str,
        customer_id: str,
        program_id: Optional[str],
        create_if_missing: bool,
    ) -> Tuple[LedgerAccount, Optional[LoyaltyProgram]]:
        account = await self.account_repo.get_by_subject(
            tenant_id, customer_id, program_id, for_update=True
        )

        if account is None and not create_if_missing:
            raise AccountNotFoundError(
                "Ledger account not found",
                tenant_id=tenant_id,
                customer_id=customer_id,
                program_id=program_id,
            )

        program = None
        if program_id is not None:
            program = await self.program_repo.get_by_id(tenant_id, program_id)
            if program is None:
                raise NotFoundError(
                    f"Loyalty program {program_id} not found",
                    reason="program",
                    tenant_id=tenant_id,
                    program_id=program_id,
                )

        if account is not None:
            return account, program

        if not await self.customer_repo.exists(tenant_id, customer_id):
            raise NotFoundError(
                f"Customer {customer_id} not found",
                reason="customer",
                tenant_id=tenant_id,
                customer_id=customer_id,
            )

        account = await self.account_repo.create(
            LedgerAccount(
                tenant_id=tenant_id,
                customer_id=customer_id,
                program_id=program_id,
            )
        )
        logger.info(
            f"Created ledger account {account.id} for tenant {tenant_id}, "
            f"customer {customer_id}, program {program_id}"
        )
        return account, program

    async def resolve_by_id(self, tenant_id: str, account_id: int) -> LedgerAccount:
        account = await self.account_repo.get_by_id(tenant_id, account_id, for_update=True)
        if account is None:
            raise AccountNotFoundError(
                f"Ledger account {account_id} not found",
                tenant_id=tenant_id,
                account_id=account_id,
            )
        return account
