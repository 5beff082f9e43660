"""Data models for lokio."""

from lokio.models.request import Language, ProvisioningRequest
from lokio.models.state import ProvisioningState, transition_state

__all__ = [
    "Language",
    "ProvisioningRequest",
    "ProvisioningState",
    "transition_state",
]
