"""
Service context tag attached to every log line.

Format: '{service}@{environment}:{instance}', e.g. 'venue-ticketing@local_dev:4711'.
"""

from functools import lru_cache
import os


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'venue-ticketing')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container runtimes expose a hostname per replica; fall back to the PID locally
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
