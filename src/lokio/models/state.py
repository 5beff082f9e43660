"""Provisioning pipeline states."""

from enum import Enum


class ProvisioningState(str, Enum):
    """State of a provisioning run."""

    IDLE = "idle"
    DIRECTORY_READY = "directory_ready"
    ACQUIRED = "acquired"
    RELOCATED = "relocated"
    CONFIG_PATCHED = "config_patched"
    LANGUAGE_PROCESSED = "language_processed"
    DONE = "done"
    FAILED = "failed"


_FORWARD = {
    ProvisioningState.IDLE: ProvisioningState.DIRECTORY_READY,
    ProvisioningState.DIRECTORY_READY: ProvisioningState.ACQUIRED,
    ProvisioningState.ACQUIRED: ProvisioningState.RELOCATED,
    ProvisioningState.RELOCATED: ProvisioningState.CONFIG_PATCHED,
    ProvisioningState.CONFIG_PATCHED: ProvisioningState.LANGUAGE_PROCESSED,
    ProvisioningState.LANGUAGE_PROCESSED: ProvisioningState.DONE,
}

TERMINAL_STATES = frozenset({ProvisioningState.DONE, ProvisioningState.FAILED})


def next_state(state: ProvisioningState) -> ProvisioningState:
    """Return the state that follows ``state`` on success.

    Raises:
        ValueError: If ``state`` is terminal
    """
    if state not in _FORWARD:
        raise ValueError(f"No state follows terminal state {state.value}")
    return _FORWARD[state]


def transition_state(
    current: ProvisioningState, new_state: ProvisioningState
) -> ProvisioningState:
    """Validate a transition between pipeline states.

    Only the single forward step and a move to FAILED from a non-terminal
    state are allowed.

    Args:
        current: State the pipeline is in
        new_state: Target state

    Returns:
        The new state

    Raises:
        ValueError: If transition is invalid
    """
    if current in TERMINAL_STATES:
        raise ValueError(f"Invalid transition: {current.value} is terminal")

    if new_state is ProvisioningState.FAILED or _FORWARD[current] is new_state:
        return new_state

    raise ValueError(f"Invalid transition: {current.value} → {new_state.value}")
