"""
Common Pydantic schemas
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error response schema"""
    error: str


class CreateResult(CamelModel):
    success: bool = True
    id: str


class UpdateResult(CamelModel):
    success: bool = True
    matched_count: int


class DeleteResult(CamelModel):
    success: bool = True
    deleted_count: int


class ReminderResult(CamelModel):
    """Outcome of one reminder run"""
    success: bool = True
    date: dt.date
    sent: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.sent + self.failed + self.skipped


class MessageResponse(BaseModel):
    message: str
