"""State machine for picker sessions."""

from enum import Enum

import structlog

from src.picker.constants import COMPONENT_PICKER


logger = structlog.get_logger()


class SessionState(str, Enum):
    """State of a picker session.

    - IDLE: Constructed, no pool or batch yet
    - ACTIVE: A batch is presented and decisions are accepted
    - COMPLETE: Terminal; no batch, no further mutation
    """

    IDLE = "IDLE"
    ACTIVE = "ACTIVE"
    COMPLETE = "COMPLETE"


# Valid state transitions
_VALID_TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.IDLE: {SessionState.ACTIVE, SessionState.COMPLETE},
    SessionState.ACTIVE: {SessionState.COMPLETE},
    SessionState.COMPLETE: set(),  # Terminal state
}


class PickerStateTransitionError(Exception):
    """Raised when an illegal state transition is attempted."""

    def __init__(
        self,
        session_id: str,
        from_state: SessionState,
        to_state: SessionState,
    ) -> None:
        """Initialize the transition error.

        Args:
            session_id: Identifier of the session.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.session_id = session_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal picker state transition for session '{session_id}': "
            f"{from_state.value} -> {to_state.value}"
        )


class SessionStateMachine:
    """Manages state transitions for a picker session.

    Enforces valid transitions and logs all state changes. ``restart``
    returns the machine to IDLE when a session is re-initialized or
    restored.
    """

    def __init__(
        self,
        session_id: str,
        initial_state: SessionState = SessionState.IDLE,
    ) -> None:
        """Initialize the state machine.

        Args:
            session_id: Identifier for the session.
            initial_state: Starting state.
        """
        self._session_id = session_id
        self._state = initial_state
        self._log = logger.bind(
            component=COMPONENT_PICKER,
            session_id=session_id,
        )

    @property
    def session_id(self) -> str:
        """Get the session identifier."""
        return self._session_id

    @property
    def state(self) -> SessionState:
        """Get the current state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return self._state == SessionState.COMPLETE

    def can_transition_to(self, target: SessionState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: SessionState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            PickerStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_picker_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise PickerStateTransitionError(
                session_id=self._session_id,
                from_state=self._state,
                to_state=target,
            )

        old_state = self._state
        self._state = target

        self._log.info(
            "picker_state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )

    def restart(self) -> None:
        """Return to IDLE ahead of a fresh initialize or restore."""
        if self._state != SessionState.IDLE:
            self._log.debug("picker_state_restart", from_state=self._state.value)
        self._state = SessionState.IDLE

    def to_active(self) -> None:
        """Transition to ACTIVE state."""
        self.transition_to(SessionState.ACTIVE)

    def to_complete(self) -> None:
        """Transition to COMPLETE state."""
        self.transition_to(SessionState.COMPLETE)
