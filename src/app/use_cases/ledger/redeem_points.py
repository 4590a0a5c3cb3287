"""RedeemPoints Use Case

Spends loyalty points from an existing program account.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.ledger_event import LedgerEventType
from .account_resolver import AccountResolver
from .dtos import RedeemCommandDTO, LedgerMutationResponseDTO
from .errors import LedgerError, failure_result
from .transaction_processor import TransactionProcessor
from .validation import validate_amount, validate_debit

logger = logging.getLogger(__name__)


class RedeemPoints:
    """
    Use Case: Redeem loyalty points

    Business Rules:
    1. Idempotency: same idempotency_key returns the original transaction
    2. Account must already exist
    3. Checked in order: active account, sufficient balance, program minimum
    4. Pessimistic locking: concurrent redemptions cannot overdraw

    Flow:
    1. Validate amount
    2. Check idempotency
    3. Lock account (SELECT FOR UPDATE)
    4. Validate debit against the locked balance
    5. Write event + transaction, update balance
    6. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        resolver: AccountResolver,
        processor: TransactionProcessor,
    ):
        self.uow = uow
        self.resolver = resolver
        self.processor = processor

    async def execute(self, command: RedeemCommandDTO) -> Result[LedgerMutationResponseDTO]:
        try:
            async with self.uow:
                points = validate_amount(command.points)

                replay = await self.processor.find_replay(
                    command.tenant_id,
                    command.idempotency_key,
                    LedgerEventType.REDEEMED,
                    points,
                    customer_id=command.customer_id,
                    program_id=command.program_id,
                )
                if replay:
                    return Return.ok(replay.to_response())

                account, program = await self.resolver.resolve(
                    command.tenant_id,
                    command.customer_id,
                    command.program_id,
                    create_if_missing=False,
                )

                validate_debit(
                    account,
                    points,
                    minimum_redemption=program.minimum_redemption if program else None,
                )

                outcome = await self.processor.apply_mutation(
                    account,
                    LedgerEventType.REDEEMED,
                    -points,
                    actor_id=command.actor_id,
                    idempotency_key=command.idempotency_key,
                    description=command.description,
                    metadata=command.metadata,
                    order_id=command.order_id,
                    program=program,
                )

                await self.uow.commit()

            return Return.ok(outcome.to_response())

        except (LedgerError, SQLAlchemyError, OSError) as e:
            return failure_result(f"Redeem for tenant {command.tenant_id}", e, logger)
