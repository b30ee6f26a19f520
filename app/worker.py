"""
Standalone queue worker process.
Runs the email and notification workers against the database queue.

    python -m app.worker
"""

import asyncio
import logging
import signal

from app.config import settings
from app.infrastructure.db.database import create_tables
from app.infrastructure.jobs.runner import WorkerPool, build_job_queue

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main() -> None:
    if settings.queue_backend == "memory":
        logger.warning("In-memory queue selected: this process will not see jobs enqueued by the API")

    create_tables()
    pool = WorkerPool(build_job_queue())

    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass

    pool.start()
    logger.info("Worker process started")
    await stop.wait()
    await pool.stop()
    logger.info("Worker process stopped")


if __name__ == "__main__":
    asyncio.run(main())
