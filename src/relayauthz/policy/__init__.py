"""Admission policy for relay-authz."""

from .model import EventDescriptor, AdmissionRequest, AdmissionDecision
from .allowlist import Allowlist
from .evaluator import evaluate

__all__ = [
    'EventDescriptor',
    'AdmissionRequest',
    'AdmissionDecision',
    'Allowlist',
    'evaluate',
]
