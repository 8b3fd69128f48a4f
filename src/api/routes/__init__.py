"""Основной API роутер, объединяющий все остальные роутеры."""

from fastapi import APIRouter

from . import categories, habit_logs, habits, moments, sleep, stats

# Основной роутер API, объединяющий все остальные
api_router = APIRouter(prefix="/v1")  # Префикс /v1 для всех API эндпоинтов

api_router.include_router(habits.router)
api_router.include_router(habit_logs.router)
api_router.include_router(sleep.router)
api_router.include_router(moments.router)
api_router.include_router(categories.router)
api_router.include_router(stats.router)

__all__ = ["api_router"]
