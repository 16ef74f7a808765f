"""
Service context extraction for log lines.

Identifies which service instance wrote a log line:
``{SERVICE_NAME}@{DEPLOY_ENV}:{instance}``.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'booking-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostname in deployments, PID for local runs
    if deploy_env == 'local_dev':
        instance = str(os.getpid())
    else:
        instance = socket.gethostname()[:12]

    return f'{service_name}@{deploy_env}:{instance}'
