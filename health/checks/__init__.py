# ============================================================================
# BUILT-IN HEALTH CHECKS
# ============================================================================
# STATUS: Checks - Factories for common dependencies
# PURPOSE: Ready-made check functions for CheckConfig.check
# CREATED: 18 OCT 2026
# ============================================================================
"""
Built-in Health Checks

Each factory returns an async check function:

HTTP:
- http_check: Upstream HTTP service reachable (status < 500)
- rabbitmq_aliveness_check: RabbitMQ management aliveness test

Database:
- postgres_check: PostgreSQL connect + SELECT VERSION()
- mysql_check: MySQL connect + SELECT VERSION()
- mongo_check: MongoDB ping

Cache:
- redis_check: Redis PING

Any other dependency can be checked with a plain function:

    async def queue_depth():
        if await broker.depth("orders") > 10_000:
            raise CheckFailedError("orders queue backlog")

    checker.register(name="orders-queue", check=queue_depth, skip_on_err=True)
"""

from health.checks.http import http_check, rabbitmq_aliveness_check
from health.checks.database import mongo_check, mysql_check, postgres_check
from health.checks.cache import redis_check

__all__ = [
    # HTTP
    "http_check",
    "rabbitmq_aliveness_check",
    # Database
    "postgres_check",
    "mysql_check",
    "mongo_check",
    # Cache
    "redis_check",
]
