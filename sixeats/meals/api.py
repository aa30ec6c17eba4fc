# -*- coding: utf-8 -*-
"""Meals — host app API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..widget.center import WIDGET_KIND, WidgetCenter, get_widget_center
from .models import ForegroundResponse, MealStateResponse, MealToggleRequest
from .storage import InvalidMealItem, MealStateStore, get_store

router = APIRouter(prefix="/api/meals", tags=["Meals"])


def _state(store: MealStateStore) -> MealStateResponse:
    return MealStateResponse.model_validate(store.snapshot().model_dump())


@router.get("", response_model=MealStateResponse, summary="Today's checked meals and last eat time")
def get_meals(store: MealStateStore = Depends(get_store)):
    return _state(store)


@router.post("/toggle", response_model=MealStateResponse, summary="Check or uncheck a meal")
def toggle_meal(request: MealToggleRequest, store: MealStateStore = Depends(get_store)):
    try:
        store.toggle_meal(request.meal_item)
    except InvalidMealItem as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _state(store)


@router.post("/foreground", response_model=ForegroundResponse, summary="Host app became active")
def app_foregrounded(center: WidgetCenter = Depends(get_widget_center)):
    """Refresh the widget as soon as the app comes to the foreground."""
    generation = center.reload_timelines(WIDGET_KIND)
    return ForegroundResponse(kind=WIDGET_KIND, generation=generation)


@router.delete("", response_model=MealStateResponse, summary="Clear all stored meal state")
def clear_meals(store: MealStateStore = Depends(get_store)):
    store.reset()
    return _state(store)
