# -*- coding: utf-8 -*-
"""Meals — Pydantic models and the fixed meal vocabulary."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

MEAL_ITEMS: tuple[str, ...] = (
    "Breakfast",
    "Lunch",
    "Dinner",
    "Snack 1",
    "Snack 2",
    "Snack 3",
)


def ordered_items(items: set[str]) -> List[str]:
    """Known meals in display order, then any unknown labels sorted."""
    known = [m for m in MEAL_ITEMS if m in items]
    extra = sorted(i for i in items if i not in MEAL_ITEMS)
    return known + extra


class MealState(BaseModel):
    checked_items: List[str] = Field(default_factory=list, description="Meals eaten today")
    last_eat_date: Optional[datetime] = Field(None, description="Most recent time a meal was checked")


class MealToggleRequest(BaseModel):
    meal_item: str = Field(..., min_length=1, description="Breakfast | Lunch | Dinner | Snack 1-3")


class MealStateResponse(MealState):
    meal_items: List[str] = Field(default_factory=lambda: list(MEAL_ITEMS))


class ForegroundResponse(BaseModel):
    status: str = "ok"
    kind: str
    generation: int = Field(..., description="Widget reload generation after the signal")
