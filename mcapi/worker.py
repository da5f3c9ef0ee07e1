# mcapi/worker.py
# Celery entry point: celery -A mcapi.worker.celery worker
# Reads the same config file as the web process (MCAPI_CONFIG, default config.json).

import os

from . import create_app

_config_file = os.getenv("MCAPI_CONFIG", "config.json")
app = create_app(config_file=_config_file if os.path.exists(_config_file) else None)
celery = app.celery_app
