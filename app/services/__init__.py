"""Business logic services package."""

from app.services.admin_service import AdminService
from app.services.base import BaseService
from app.services.ledger_service import LedgerService

__all__ = ["AdminService", "BaseService", "LedgerService"]
