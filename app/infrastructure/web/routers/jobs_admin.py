"""
Job queue admin router.
Queue depth and recent failures, for admins.
"""

from typing import Annotated, Any, Dict
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.infrastructure.queue.backend import JobQueue, JobStatus
from app.infrastructure.queue.jobs import QueueName
from app.infrastructure.web.dependencies import get_job_queue


router = APIRouter()


@router.get("/{queue_name}")
async def get_queue_status(
    queue_name: str,
    queue: Annotated[JobQueue, Depends(get_job_queue)],
    limit: int = Query(20, ge=1, le=200, description="Failed jobs to return")
) -> Dict[str, Any]:
    """Job counts by status plus the most recent failed jobs of one queue."""
    if queue_name not in {name.value for name in QueueName}:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown queue: {queue_name}"
        )

    counts = await queue.counts(queue_name)
    failed = await queue.list_jobs(queue_name, JobStatus.FAILED, limit=limit)
    return {
        "queue": queue_name,
        "counts": counts,
        "failed": [
            {
                "id": job.id,
                "name": job.name,
                "attempts_made": job.attempts_made,
                "last_error": job.last_error,
                "finished_at": job.finished_at.isoformat() if job.finished_at else None,
                "data": job.data,
            }
            for job in failed
        ],
    }
