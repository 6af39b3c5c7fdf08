"""
Service context extraction for distributed logging.

Provides service identification across Lambda and local environments
for better log traceability.
"""

from functools import lru_cache
import os

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = settings.SERVICE_NAME
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Lambda exposes the log stream per execution environment
    instance_id = 'local'
    log_stream = os.getenv('AWS_LAMBDA_LOG_STREAM_NAME', '')
    if log_stream:
        # Log stream looks like: 2024/06/01/[$LATEST]2b1c0e8d5a3f4e1c9d7b6a5f4e3d2c1b
        instance_id = log_stream.rsplit(']', 1)[-1][:8] or 'lambda'
    else:
        # Use PID for local development
        instance_id = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
