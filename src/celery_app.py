"""Celery application configuration."""

from celery import Celery

from src.config import get_settings

settings = get_settings()

app = Celery(
    "meal_planner",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.ingredient_sync"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=120,  # 2 minutes max per task
    task_soft_time_limit=90,
    task_default_rate_limit="60/m",  # Open Food Facts asks for gentle clients
)
