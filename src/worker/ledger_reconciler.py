"""Ledger reconciliation worker

Recomputes every ledger account from its transaction log on a schedule
and raises one alert per discrepancy found.

    python -m src.worker.ledger_reconciler --once
    python -m src.worker.ledger_reconciler --interval 3600
"""

import argparse
import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from config import ApplicationConfig
from src.adapter.repositories.ledger_account_repository import SqlAlchemyLedgerAccountRepository
from src.adapter.repositories.ledger_transaction_repository import SqlAlchemyLedgerTransactionRepository
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger import ReconcileLedger, ReconciliationResultDTO
from src.app.use_cases.ledger.dtos import LedgerDiscrepancyDTO
from src.depends import create_ledger_engine, create_session_factory

logger = logging.getLogger(__name__)

# Isolation that keeps every read of one run on the same snapshot. SQLite
# already serializes through BEGIN IMMEDIATE.
SNAPSHOT_ISOLATION = {"postgresql": "REPEATABLE READ"}


class ReconciliationFailedError(RuntimeError):
    pass


class LedgerReconcilerWorker:
    """
    Scheduled ledger reconciliation

    Owns its own engine, so it can run in a separate process from the API.
    Alerts go through a NotificationService; by default a logging channel
    plus RECONCILIATION_NOTIFICATION_WEBHOOK when configured.
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.engine = create_ledger_engine(self.db_uri)
        self.async_session_factory = create_session_factory(self.engine)
        self.notification_service = notification_service or create_notification_service(
            ApplicationConfig.RECONCILIATION_NOTIFICATION_WEBHOOK
        )
        self.undelivered_alerts = 0

        logger.info("LedgerReconcilerWorker initialized")

    async def run_once(self) -> ReconciliationResultDTO:
        """
        Reconcile all accounts once and alert on each discrepancy.

        Raises:
            ReconciliationFailedError: the ledger store could not be read
        """
        if not ApplicationConfig.RECONCILIATION_ENABLED:
            logger.info("Ledger reconciliation is disabled, skipping")
            return ReconciliationResultDTO(
                total_accounts_checked=0,
                discrepancies_found=0,
                discrepancies=[],
                reconciliation_time=datetime.utcnow(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            await self._pin_snapshot(session)
            result = await ReconcileLedger(
                uow=SqlAlchemyUnitOfWork(session),
                account_repo=SqlAlchemyLedgerAccountRepository(session),
                transaction_repo=SqlAlchemyLedgerTransactionRepository(session),
            ).execute()

        if result.is_err():
            raise ReconciliationFailedError(f"{result.error.code}: {result.error.message}")

        report = result.value
        if report.discrepancies:
            logger.error(
                f"{report.discrepancies_found} ledger discrepancies in "
                f"{report.total_accounts_checked} accounts"
            )
            await self._alert(report.discrepancies)
        return report

    async def _pin_snapshot(self, session):
        isolation = SNAPSHOT_ISOLATION.get(self.engine.dialect.name)
        if isolation:
            await session.connection(execution_options={"isolation_level": isolation})

    async def _alert(self, discrepancies: List[LedgerDiscrepancyDTO]):
        for discrepancy in discrepancies:
            delivered = await self.notification_service.send_discrepancy_alert(discrepancy)
            if not delivered:
                self.undelivered_alerts += 1
                logger.warning(
                    f"Alert for account {discrepancy.account_id} ({discrepancy.kind}) was not delivered"
                )

    async def run_forever(self, interval_seconds: int = 86400):
        """Reconcile every ``interval_seconds``; a failed cycle is logged and retried next cycle."""
        logger.info(f"Reconciling ledger every {interval_seconds}s")

        while True:
            try:
                report = await self.run_once()
            except ReconciliationFailedError as e:
                logger.error(f"Reconciliation cycle failed: {e}")
            else:
                logger.info(
                    f"Reconciliation cycle done: {report.total_accounts_checked} accounts, "
                    f"{report.discrepancies_found} discrepancies, {report.execution_time_ms}ms"
                )

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        await self.engine.dispose()
        logger.info("LedgerReconcilerWorker shutdown complete")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ledger reconciliation worker")
    parser.add_argument("--once", action="store_true", help="Reconcile once and exit")
    parser.add_argument(
        "--interval",
        type=int,
        default=ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS,
        help="Seconds between runs (default: RECONCILIATION_INTERVAL_SECONDS)",
    )
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None):
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)
    worker = LedgerReconcilerWorker()

    try:
        if args.once:
            report = await worker.run_once()
            logger.info(
                f"Checked {report.total_accounts_checked} accounts, "
                f"found {report.discrepancies_found} discrepancies in {report.execution_time_ms}ms"
            )
            for d in report.discrepancies:
                logger.info(
                    f"  tenant={d.tenant_id} account={d.account_id} {d.kind} "
                    f"expected={d.expected} actual={d.actual}"
                )
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
