"""VerifyCashbook Use Case

Checks stored running totals against a fresh recalculation.
"""

import logging
import time
from src.domain.base import utc_now
from libs.result import Result, Return, Error
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository
from src.domain.cashbook_calculation import recalculate
from .dtos import CalculationDiscrepancyDTO, VerificationResultDTO

logger = logging.getLogger(__name__)


class VerifyCashbook:
    """
    Use Case: Verify cashbook calculations

    Business Rules:
    1. Recalculates the active cashbook in memory
    2. Compares every non-pinned stored total with the recalculated value
    3. Records and logs any discrepancies found
    4. Does NOT modify any data (read-only verification)
    """

    def __init__(self, entry_repo: CashbookEntryRepository):
        self.entry_repo = entry_repo

    async def execute(self) -> Result[VerificationResultDTO]:
        start_time = time.time()
        verification_time = utc_now()

        try:
            logger.info("Starting cashbook verification")

            entries = await self.entry_repo.get_active_entries()
            result = recalculate(entries)
            by_id = {entry.id: entry for entry in entries}

            discrepancies: list[CalculationDiscrepancyDTO] = []
            for recalculated in result.entries:
                entry = by_id[recalculated.entry_id]
                for kind, calculated in recalculated.values.items():
                    stored = entry.get_value(kind)
                    if stored != calculated:
                        discrepancies.append(
                            CalculationDiscrepancyDTO(
                                entry_id=entry.id,
                                sequence_position=entry.sequence_position,
                                field=kind.value,
                                stored_value=stored,
                                calculated_value=calculated,
                                difference=stored - calculated,
                            )
                        )

            execution_time_ms = int((time.time() - start_time) * 1000)

            if result.sequence_collisions:
                logger.warning(
                    f"Sequence position collisions at {result.sequence_collisions}"
                )

            if discrepancies:
                logger.warning(
                    f"Verification complete. Found {len(discrepancies)} discrepancies "
                    f"across {len(entries)} entries in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Verification complete. All {len(entries)} entries consistent "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(
                VerificationResultDTO(
                    total_entries_checked=len(entries),
                    discrepancies_found=len(discrepancies),
                    discrepancies=discrepancies,
                    sequence_collisions=result.sequence_collisions,
                    verification_time=verification_time,
                    execution_time_ms=execution_time_ms,
                )
            )

        except Exception as e:
            logger.error(f"Cashbook verification failed: {e}")
            return Return.err(
                Error(
                    code="VERIFICATION_FAILED",
                    message="Failed to verify cashbook",
                    reason=str(e),
                )
            )
