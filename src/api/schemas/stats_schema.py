"""Схемы Pydantic для месячной статистики."""

from datetime import date

from .base_schema import BaseSchema


class DailyCompletionSchema(BaseSchema):
    day: date
    completion: int
    total: int
    percentage: int


class HabitBreakdownSchema(BaseSchema):
    habit_id: int
    name: str
    color: str
    completed: int
    total: int
    percentage: int


class DistributionEntrySchema(BaseSchema):
    name: str
    value: int


class SummaryCardsSchema(BaseSchema):
    total_completions: int
    overall_percentage: int
    best_habit: str | None
    best_habit_percentage: int
    average_completion: int
    active_streaks: int


class SleepSummarySchema(BaseSchema):
    total_nights: int
    average_hours: float
    min_hours: float | None
    max_hours: float | None


class MonthlyStatsSchemaRead(BaseSchema):
    """Вся статистика за месяц."""

    month: date
    daily: list[DailyCompletionSchema]
    breakdown: list[HabitBreakdownSchema]
    distribution: list[DistributionEntrySchema]
    summary: SummaryCardsSchema
    sleep: SleepSummarySchema
