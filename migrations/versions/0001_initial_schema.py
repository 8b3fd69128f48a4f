"""Начальная схема: привычки, записи, серии, категории, сон, моменты

Revision ID: 0001
Revises:
Create Date: 2025-01-15 12:00:00

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

habit_type_enum = sa.Enum("boolean", "counter", name="habit_type_enum")
frequency_type_enum = sa.Enum("daily", "weekly", "interval", "custom", name="frequency_type_enum")
difficulty_level_enum = sa.Enum("easy", "medium", "hard", name="difficulty_level_enum")


def timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False,
                  comment="Время создания записи"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False,
                  comment="Время последнего обновления записи"),
    ]


def upgrade() -> None:
    op.create_table(
        "habit_categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=7), nullable=False),
        sa.Column("icon", sa.String(length=50), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_habit_categories")),
    )
    op.create_index(op.f("ix_habit_categories_id"), "habit_categories", ["id"])
    op.create_index(op.f("ix_habit_categories_user_id"), "habit_categories", ["user_id"])

    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=7), nullable=False),
        sa.Column("habit_type", habit_type_enum, nullable=False),
        sa.Column("target_count", sa.Integer(), nullable=False),
        sa.Column("frequency_type", frequency_type_enum, nullable=False),
        sa.Column("frequency_days", sa.JSON(), nullable=False),
        sa.Column("frequency_interval_days", sa.Integer(), nullable=False),
        sa.Column("difficulty_level", difficulty_level_enum, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.CheckConstraint("target_count >= 1", name=op.f("ck_habits_target_count_positive")),
        sa.CheckConstraint("frequency_interval_days >= 1", name=op.f("ck_habits_interval_days_positive")),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["habit_categories.id"],
            name=op.f("fk_habits_category_id_habit_categories"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_habits")),
    )
    op.create_index(op.f("ix_habits_id"), "habits", ["id"])
    op.create_index(op.f("ix_habits_user_id"), "habits", ["user_id"])
    op.create_index(op.f("ix_habits_category_id"), "habits", ["category_id"])
    op.create_index(op.f("ix_habits_is_active"), "habits", ["is_active"])

    op.create_table(
        "habit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), nullable=False),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("done", sa.Boolean(), nullable=False),
        sa.Column("current_count", sa.Integer(), nullable=False),
        sa.Column("completion_percentage", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint("current_count >= 0", name=op.f("ck_habit_logs_current_count_non_negative")),
        sa.CheckConstraint(
            "completion_percentage BETWEEN 0 AND 100", name=op.f("ck_habit_logs_completion_percentage_range")
        ),
        sa.ForeignKeyConstraint(
            ["habit_id"], ["habits.id"], name=op.f("fk_habit_logs_habit_id_habits"), ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_habit_logs")),
        sa.UniqueConstraint("habit_id", "log_date", name="uq_habit_log_per_day"),
    )
    op.create_index(op.f("ix_habit_logs_id"), "habit_logs", ["id"])
    op.create_index(op.f("ix_habit_logs_habit_id"), "habit_logs", ["habit_id"])
    op.create_index(op.f("ix_habit_logs_log_date"), "habit_logs", ["log_date"])

    op.create_table(
        "habit_streaks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False),
        sa.Column("longest_streak", sa.Integer(), nullable=False),
        sa.Column("last_completed_date", sa.Date(), nullable=True),
        sa.Column("streak_start_date", sa.Date(), nullable=True),
        sa.Column("total_completions", sa.Integer(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ["habit_id"], ["habits.id"], name=op.f("fk_habit_streaks_habit_id_habits"), ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_habit_streaks")),
    )
    op.create_index(op.f("ix_habit_streaks_id"), "habit_streaks", ["id"])
    op.create_index(op.f("ix_habit_streaks_habit_id"), "habit_streaks", ["habit_id"], unique=True)
    op.create_index(op.f("ix_habit_streaks_user_id"), "habit_streaks", ["user_id"])

    op.create_table(
        "sleep_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("hours", sa.Float(), nullable=False),
        *timestamps(),
        sa.CheckConstraint("hours >= 0 AND hours <= 24", name=op.f("ck_sleep_logs_hours_range")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_sleep_logs")),
        sa.UniqueConstraint("user_id", "log_date", name="uq_sleep_log_per_day"),
    )
    op.create_index(op.f("ix_sleep_logs_id"), "sleep_logs", ["id"])
    op.create_index(op.f("ix_sleep_logs_user_id"), "sleep_logs", ["user_id"])
    op.create_index(op.f("ix_sleep_logs_log_date"), "sleep_logs", ["log_date"])

    op.create_table(
        "memorable_moments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("moment_date", sa.Date(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_memorable_moments")),
    )
    op.create_index(op.f("ix_memorable_moments_id"), "memorable_moments", ["id"])
    op.create_index(op.f("ix_memorable_moments_user_id"), "memorable_moments", ["user_id"])
    op.create_index(op.f("ix_memorable_moments_moment_date"), "memorable_moments", ["moment_date"])


def downgrade() -> None:
    op.drop_table("memorable_moments")
    op.drop_table("sleep_logs")
    op.drop_table("habit_streaks")
    op.drop_table("habit_logs")
    op.drop_table("habits")
    op.drop_table("habit_categories")

    # Типы ENUM в PostgreSQL не удаляются вместе с таблицами
    bind = op.get_bind()
    difficulty_level_enum.drop(bind, checkfirst=True)
    frequency_type_enum.drop(bind, checkfirst=True)
    habit_type_enum.drop(bind, checkfirst=True)
