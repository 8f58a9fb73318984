from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class BrokerOptionOut(BaseModel):
    value: str
    label: str


class SelectionOut(BaseModel):
    broker: str = ""
    topic: str
    limit: int = Field(..., ge=0)


class BrokerListOut(BaseModel):
    options: List[BrokerOptionOut] = Field(default_factory=list)
    selection: SelectionOut
    sequence: Optional[int] = None


class ChartDatasetOut(BaseModel):
    label: str
    borderColor: str
    data: List[Optional[float]] = Field(default_factory=list)
    fill: bool = False
    spanGaps: bool = False


class ChartFrameOut(BaseModel):
    labels: List[str] = Field(default_factory=list)
    datasets: List[ChartDatasetOut] = Field(default_factory=list)


class SeriesOut(ChartFrameOut):
    selection: SelectionOut
    sequence: Optional[int] = None
