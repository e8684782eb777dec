import datetime as dt
from pydantic import BaseModel, Field

class SlotTemplateIn(BaseModel):
    slots: list[str] = Field(default_factory=list)

class SlotTemplateOut(BaseModel):
    doctor_id: str
    slots: list[str]

class SlotsOut(BaseModel):
    doctor_id: str
    date: dt.date
    slots: list[str]
