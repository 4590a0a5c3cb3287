"""SetAccountStatus Use Case

Deactivates or reactivates a ledger account. The only way an account
changes status.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from .dtos import AccountDTO, SetAccountStatusCommandDTO
from .errors import AccountNotFoundError, LedgerError, failure_result

logger = logging.getLogger(__name__)


class SetAccountStatus:
    def __init__(self, uow: UnitOfWork, account_repo: LedgerAccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(self, command: SetAccountStatusCommandDTO) -> Result[AccountDTO]:
        try:
            async with self.uow:
                account = await self.account_repo.get_by_id(
                    command.tenant_id, command.account_id, for_update=True
                )
                if account is None:
                    raise AccountNotFoundError(
                        f"Ledger account {command.account_id} not found",
                        tenant_id=command.tenant_id,
                        account_id=command.account_id,
                    )

                if account.is_active != command.is_active:
                    account.is_active = command.is_active
                    await self.account_repo.update(account)
                    await self.uow.commit()
                    logger.info(
                        f"Account {account.id} (tenant {command.tenant_id}) "
                        f"{'reactivated' if command.is_active else 'deactivated'} by {command.actor_id}"
                    )

                response = AccountDTO.from_account(account)

            return Return.ok(response)

        except (LedgerError, SQLAlchemyError, OSError) as e:
            return failure_result(
                f"Status change of account {command.account_id} for tenant {command.tenant_id}",
                e,
                logger,
            )
