from datetime import datetime
from typing import Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class NotYetExecuted(BaseModel):
    """Initial state of a query runner, before the first `perform`."""

    model_config = ConfigDict(frozen=True)

    status: Literal["not_yet_executed"] = "not_yet_executed"


class Found(BaseModel):
    """
    The fetch matched one or more records.

    Never empty: a fetch with zero rows is an `ExecutedNoMatch`, so building
    a `Found` from an empty list fails validation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Literal["found"] = "found"
    records: List[Any] = Field(min_length=1)

    @property
    def first(self) -> Any:
        return self.records[0]


class ExecutedNoMatch(BaseModel):
    """The fetch ran without error and matched nothing."""

    model_config = ConfigDict(frozen=True)

    status: Literal["no_match"] = "no_match"
    timestamp: datetime


class Failed(BaseModel):
    """The fetch itself raised."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Literal["failed"] = "failed"
    error: BaseException


QueryResult = Union[NotYetExecuted, Found, ExecutedNoMatch, Failed]
