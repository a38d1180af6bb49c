"""
Call Outcome Catalog Models
Labels offered to callers when they annotate a call
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class CallOutcomeOption(BaseModel):
    """A selectable outcome label with its display colors"""
    id: str
    label: str
    bg_color: str
    text_color: str
    border_color: Optional[str] = None
    hover_color: Optional[str] = None
    sort_order: int = 0

    model_config = {"from_attributes": True}


class CallOutcomeCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=50)
    bg_color: str = Field(..., min_length=1, max_length=30)
    text_color: str = Field(..., min_length=1, max_length=30)
    border_color: Optional[str] = Field(default=None, max_length=30)
    hover_color: Optional[str] = Field(default=None, max_length=30)
    sort_order: int = 0


class CallOutcomePatch(BaseModel):
    label: Optional[str] = Field(default=None, min_length=1, max_length=50)
    bg_color: Optional[str] = Field(default=None, max_length=30)
    text_color: Optional[str] = Field(default=None, max_length=30)
    border_color: Optional[str] = Field(default=None, max_length=30)
    hover_color: Optional[str] = Field(default=None, max_length=30)
    sort_order: Optional[int] = None


DEFAULT_CALL_OUTCOMES: List[CallOutcomeCreate] = [
    CallOutcomeCreate(label="Booked", bg_color="bg-green-100", text_color="text-green-700",
                      border_color="border-green-200", hover_color="hover:bg-green-200", sort_order=1),
    CallOutcomeCreate(label="Call back", bg_color="bg-yellow-100", text_color="text-yellow-700",
                      border_color="border-yellow-200", hover_color="hover:bg-yellow-200", sort_order=2),
    CallOutcomeCreate(label="Don't Call", bg_color="bg-gray-700", text_color="text-white",
                      border_color="border-gray-700", hover_color="hover:bg-gray-800", sort_order=3),
    CallOutcomeCreate(label="Send an email", bg_color="bg-blue-100", text_color="text-blue-700",
                      border_color="border-blue-200", hover_color="hover:bg-blue-200", sort_order=4),
    CallOutcomeCreate(label="Not Interested", bg_color="bg-red-600", text_color="text-white",
                      border_color="border-red-600", hover_color="hover:bg-red-700", sort_order=5),
    CallOutcomeCreate(label="Hang up", bg_color="bg-pink-100", text_color="text-pink-700",
                      border_color="border-pink-200", hover_color="hover:bg-pink-200", sort_order=6),
    CallOutcomeCreate(label="Get back to you", bg_color="bg-purple-300", text_color="text-purple-700",
                      border_color="border-purple-300", hover_color="hover:bg-purple-400", sort_order=7),
]
