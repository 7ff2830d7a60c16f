from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: contact/org data of an employee-role account.

    ``name`` and ``email`` mirror the owning account and are kept in sync on update.
    """

    employee_id: int
    account_id: int
    name: str
    email: str
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
