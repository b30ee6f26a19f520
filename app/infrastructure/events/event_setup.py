"""
Event system setup and configuration.
Registers the job producers with the event dispatcher.
"""

import logging
from typing import Optional

from app.domain.events.base import EventDispatcher, get_event_dispatcher
from app.infrastructure.queue.backend import JobQueue
from .job_producer import ProposalJobProducer, VerificationJobProducer

logger = logging.getLogger(__name__)


VERIFICATION_EVENTS = ("CompanyVerified", "CompanyRejected", "EventVerified", "EventRejected")
PROPOSAL_EVENTS = ("ProposalCreated", "ProposalStatusChanged")


def setup_event_handlers(dispatcher: EventDispatcher, queue: JobQueue) -> None:
    """Set up and register all event handlers."""

    verification_producer = VerificationJobProducer(queue)
    proposal_producer = ProposalJobProducer(queue)

    for event_type in VERIFICATION_EVENTS:
        dispatcher.register_handler(event_type, verification_producer)

    for event_type in PROPOSAL_EVENTS:
        dispatcher.register_handler(event_type, proposal_producer)

    logger.info("Event handlers registered successfully")

    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.info(f"Event {event_type}: {', '.join(handlers)} handlers")


def initialize_event_system(queue: JobQueue, dispatcher: Optional[EventDispatcher] = None) -> EventDispatcher:
    """Initialize the complete event system."""
    dispatcher = dispatcher or get_event_dispatcher()
    try:
        dispatcher.clear_handlers()
        setup_event_handlers(dispatcher, queue)
        logger.info("Event system initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize event system: {str(e)}")
        raise
    return dispatcher
