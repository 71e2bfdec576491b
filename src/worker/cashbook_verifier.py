"""Cashbook Verification Background Worker

Periodically checks stored running totals against a fresh recalculation and,
when asked to, repairs them. The worker's lifetime belongs to its host
process: construct it, call run_once() or run_forever(), then shutdown().
"""

import asyncio
import logging
from src.domain.base import utc_now
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.cashbook_entry_repository import SqlAlchemyCashbookEntryRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.notification_service import create_notification_service
from src.app.use_cases.cashbook import RecalculateCashbook, VerifyCashbook, VerificationResultDTO

logger = logging.getLogger(__name__)


class CashbookVerifierWorker:
    """
    Background worker for cashbook verification

    Features:
    - Compares stored running totals against a recalculation
    - Logs discrepancies and sends an alert (log, optional webhook)
    - Optionally recalculates the cashbook when discrepancies are found
    - Can run once or continuously, until stop() is called

    Usage:
        worker = CashbookVerifierWorker()
        result = await worker.run_once()

        worker = CashbookVerifierWorker(repair=True)
        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        repair: bool = False,
        write_lock: Optional[asyncio.Lock] = None,
        webhook_url: Optional[str] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            repair: Recalculate the cashbook when discrepancies are found
            write_lock: Cashbook write lock shared with the host. A standalone
                worker owns its own lock; the API process is then held off
                by the row locks taken during recalculation.
            webhook_url: Notification webhook URL (defaults to config)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.repair = repair
        self.write_lock = write_lock or asyncio.Lock()
        self.webhook_url = webhook_url or ApplicationConfig.VERIFICATION_NOTIFICATION_WEBHOOK
        self._stopped = asyncio.Event()

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        self.notification_service = create_notification_service(self.webhook_url)

        logger.info("CashbookVerifierWorker initialized")

    async def run_once(self) -> VerificationResultDTO:
        """
        Run verification once

        Returns:
            VerificationResultDTO with verification results
        """
        if not ApplicationConfig.VERIFICATION_ENABLED:
            logger.info("Cashbook verification is disabled, skipping")
            return VerificationResultDTO(
                total_entries_checked=0,
                discrepancies_found=0,
                discrepancies=[],
                verification_time=utc_now(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            entry_repo = SqlAlchemyCashbookEntryRepository(session)
            result = await VerifyCashbook(entry_repo).execute()

            if result.is_err():
                logger.error(f"Verification failed: {result.error.message}")
                raise RuntimeError(f"Verification failed: {result.error.message}")

            response = result.value

            if response.discrepancies_found > 0:
                logger.error(
                    f"ALERT: {response.discrepancies_found} cashbook discrepancies found!"
                )
                for d in response.discrepancies:
                    logger.error(
                        f"  - Entry {d.entry_id} (position={d.sequence_position}) {d.field}: "
                        f"expected={d.calculated_value}, actual={d.stored_value}, "
                        f"diff={d.difference}"
                    )

                await self.notification_service.send_discrepancy_alert(response)

                if self.repair:
                    await self._repair(session)

            return response

    async def _repair(self, session: AsyncSession) -> None:
        use_case = RecalculateCashbook(
            uow=SqlAlchemyUnitOfWork(session),
            entry_repo=SqlAlchemyCashbookEntryRepository(session),
            write_lock=self.write_lock,
            timeout_seconds=ApplicationConfig.CASHBOOK_MUTATION_TIMEOUT_SECONDS,
        )
        result = await use_case.execute()
        if result.is_err():
            logger.error(f"Cashbook repair failed: {result.error.reason}")
            raise RuntimeError(f"Cashbook repair failed: {result.error.message}")
        logger.warning(
            f"Cashbook repaired: recalculated {result.value.recalculated_entries} entries"
        )

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Run verification continuously at specified interval

        Args:
            interval_seconds: Seconds between verification runs (default: 24 hours)
        """
        logger.info(
            f"Starting continuous cashbook verification with {interval_seconds}s interval"
        )

        while not self._stopped.is_set():
            try:
                result = await self.run_once()
                logger.info(
                    f"Verification cycle complete. "
                    f"Checked {result.total_entries_checked} entries, "
                    f"found {result.discrepancies_found} discrepancies "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Verification cycle failed: {e}")

            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=interval_seconds)
            except asyncio.TimeoutError:
                pass

    def stop(self):
        """Ask run_forever to return after the current cycle"""
        self._stopped.set()

    async def shutdown(self):
        """Cleanup resources"""
        self.stop()
        await self.engine.dispose()
        logger.info("CashbookVerifierWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.cashbook_verifier --once

        # Run once and recalculate if anything is off
        python -m src.worker.cashbook_verifier --once --repair

        # Run continuously with custom interval (in seconds)
        python -m src.worker.cashbook_verifier --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Cashbook Verification Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--repair", action="store_true", help="Recalculate the cashbook when discrepancies are found"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.VERIFICATION_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: VERIFICATION_INTERVAL_SECONDS)"
    )
    args = parser.parse_args()

    worker = CashbookVerifierWorker(repair=args.repair)

    try:
        if args.once:
            result = await worker.run_once()
            print("Verification complete:")
            print(f"  Entries checked: {result.total_entries_checked}")
            print(f"  Discrepancies found: {result.discrepancies_found}")
            print(f"  Sequence collisions: {result.sequence_collisions}")
            print(f"  Execution time: {result.execution_time_ms}ms")
            if result.discrepancies:
                print("\nDiscrepancies:")
                for d in result.discrepancies:
                    print(
                        f"  - Entry {d.entry_id} {d.field}: "
                        f"expected={d.calculated_value}, "
                        f"actual={d.stored_value}, "
                        f"diff={d.difference}"
                    )
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
