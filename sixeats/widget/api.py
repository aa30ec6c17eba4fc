# -*- coding: utf-8 -*-
"""Widget — timeline and intent endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..meals.models import MealToggleRequest
from ..meals.storage import InvalidMealItem, MealStateStore, get_store
from .center import WIDGET_KIND, WidgetCenter, get_widget_center
from .intents import RefreshIntent, ToggleMealIntent
from .timeline import WidgetEntry, build_timeline, placeholder, snapshot

router = APIRouter(prefix="/api/widget", tags=["Widget"])


class TimelineResponse(BaseModel):
    kind: str
    generation: int
    entries: List[WidgetEntry]
    labels: List[str]
    reload_after: str


class IntentResponse(BaseModel):
    status: str = "ok"
    generation: int


@router.get("/placeholder", response_model=WidgetEntry)
def widget_placeholder(store: MealStateStore = Depends(get_store)):
    return placeholder(store.clock())


@router.get("/snapshot", response_model=WidgetEntry)
def widget_snapshot(store: MealStateStore = Depends(get_store)):
    return snapshot(store.clock())


@router.get("/timeline", response_model=TimelineResponse, summary="Render-ahead widget entries")
def widget_timeline(
    store: MealStateStore = Depends(get_store),
    center: WidgetCenter = Depends(get_widget_center),
):
    timeline = build_timeline(store, store.clock())
    return TimelineResponse(
        kind=WIDGET_KIND,
        generation=center.generation(WIDGET_KIND),
        entries=timeline.entries,
        labels=[e.elapsed_label() for e in timeline.entries],
        reload_after=timeline.reload_after.isoformat(),
    )


@router.post("/toggle", response_model=IntentResponse, summary="Toggle a meal from the widget")
def widget_toggle(
    request: MealToggleRequest,
    store: MealStateStore = Depends(get_store),
    center: WidgetCenter = Depends(get_widget_center),
):
    try:
        generation = ToggleMealIntent(request.meal_item).perform(store, center)
    except InvalidMealItem as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return IntentResponse(generation=generation)


@router.post("/refresh", response_model=IntentResponse, summary="Refresh the widget timer")
def widget_refresh(center: WidgetCenter = Depends(get_widget_center)):
    return IntentResponse(generation=RefreshIntent().perform(center))
