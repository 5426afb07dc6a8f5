"""Demo data seed script for the SuiPay API.

Creates the demo creator and sample payments in the configured record store.
It is idempotent and safe to run on every container start.
"""

import asyncio
import logging

from fastapi import HTTPException

from app.config import settings
from app.services.demo import create_demo_data
from app.store.factory import create_store

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def seed_demo():
    """Create demo data if it doesn't exist."""
    store = create_store(settings)
    await store.initialize()
    try:
        result = await create_demo_data(store)
    except HTTPException:
        logger.info("Demo data already exists, skipping")
        return
    finally:
        await store.close()

    logger.info(
        f"Demo creator created: {result['creator']['username']} "
        f"({result['payments']} payments, {result['total_amount']:.2f} SUI)"
    )
    logger.info(f"Demo session token: {result['token']}")


def main():
    """Entry point for the seed script."""
    asyncio.run(seed_demo())


if __name__ == "__main__":
    main()
