"""Background workers for the cashbook service"""
from .cashbook_verifier import CashbookVerifierWorker

__all__ = ["CashbookVerifierWorker"]
