"""
Storage Quota Models
Utilization samples and the notifications they raise
"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum

class StorageTier(str, Enum):
    """Severity of a storage utilization sample"""
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"

class StorageUtilizationSample(BaseModel):
    """Derived from a usage report, never stored"""
    used_bytes: int = Field(ge=0)
    capacity_bytes: int = Field(gt=0)
    percent: float = Field(ge=0, le=100)
    tier: StorageTier

class QuotaNotification(BaseModel):
    """Quota notification created by the notifier"""
    id: str
    date_key: str  # YYYY-MM-DD
    tier: StorageTier
    title: str
    body: str
    link: str

class QuotaCheckResult(BaseModel):
    """Outcome of one quota check run"""
    sample: Optional[StorageUtilizationSample] = None
    notification: Optional[QuotaNotification] = None

    @property
    def has_data(self) -> bool:
        return self.sample is not None
