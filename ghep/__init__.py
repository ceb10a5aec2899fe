"""ghep: generated-event record for simulated particle interactions."""

from __future__ import annotations

__version__ = "0.1.0"

from .models import FourVector, Interaction, Particle
from .record import EventRecord, RecordIndexError
from .status import ParticleStatus
from .printing import format_record, momentum_balance
from .validation import validate

__all__ = [
    "__version__",
    "EventRecord",
    "RecordIndexError",
    "Particle",
    "Interaction",
    "FourVector",
    "ParticleStatus",
    "format_record",
    "momentum_balance",
    "validate",
]
