# mcapi/extensions.py
# Single place to build shared clients: Redis connection pool, Celery

import redis
from celery import Celery


def make_redis(app) -> redis.Redis:
    return redis.Redis.from_url(
        app.config["REDIS_URL"],
        max_connections=app.config["REDIS_POOL_SIZE"],
        decode_responses=True,
    )


def make_celery(app):
    celery = Celery(app.import_name,
                    broker=app.config["CELERY_BROKER_URL"],
                    backend=app.config["CELERY_RESULT_BACKEND"])
    celery.conf.update(
        task_always_eager=app.config["CELERY_TASK_ALWAYS_EAGER"],
        task_ignore_result=True,
    )
    TaskBase = celery.Task

    class ContextTask(TaskBase):
        abstract = True
        def __call__(self, *args, **kwargs):
            with app.app_context():
                return TaskBase.__call__(self, *args, **kwargs)
    celery.Task = ContextTask
    return celery
