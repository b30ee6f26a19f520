"""
Infrastructure event handlers.
Turns domain events into durable queue jobs.
"""

from .job_producer import JobProducer, ProposalJobProducer, VerificationJobProducer
from .event_setup import setup_event_handlers, initialize_event_system

__all__ = [
    "JobProducer",
    "ProposalJobProducer",
    "VerificationJobProducer",
    "setup_event_handlers",
    "initialize_event_system",
]
