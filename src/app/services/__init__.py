from .unit_of_work import UnitOfWork
from .cashbook_recalculator import CashbookRecalculator

__all__ = [
    "UnitOfWork",
    "CashbookRecalculator",
]
