"""
Celery configuration for the Catalog Alternative URL service.

This module configures Celery for asynchronous alternative URL runs,
which go to their own queue so that long system-wide runs do not block
other work.
"""

import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("catalog_alt_urls")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django apps.
app.autodiscover_tasks()

# Configure task queues for different operations
app.conf.task_queues = {
    "alt_urls": {
        "exchange": "alt_urls",
        "routing_key": "alt_urls",
    },
    "default": {
        "exchange": "default",
        "routing_key": "default",
    },
}

# Default task routing
app.conf.task_default_queue = "default"
app.conf.task_default_exchange = "default"
app.conf.task_default_routing_key = "default"

# Route alternative URL tasks to their queue
app.conf.task_routes = {
    "catalog.tasks.generate_*": {"queue": "alt_urls"},
    "catalog.tasks.export_*": {"queue": "alt_urls"},
}

# Configure Celery Beat schedule for periodic tasks
app.conf.beat_schedule = {
    "export-alt-urls-nightly": {
        "task": "catalog.tasks.export_alt_urls_from_config_task",
        "schedule": crontab(hour=2, minute=30),  # Every night at 02:30
    },
}
