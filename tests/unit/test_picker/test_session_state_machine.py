"""Unit tests for the picker session state machine."""

import pytest

from src.picker.state_machine import (
    PickerStateTransitionError,
    SessionState,
    SessionStateMachine,
)


class TestSessionState:
    """Tests for SessionState enum."""

    def test_all_states_defined(self) -> None:
        """Test all required states are defined."""
        assert SessionState.IDLE.value == "IDLE"
        assert SessionState.ACTIVE.value == "ACTIVE"
        assert SessionState.COMPLETE.value == "COMPLETE"


class TestSessionStateMachine:
    """Tests for SessionStateMachine class."""

    def test_initial_state(self) -> None:
        """Test initial state is IDLE."""
        sm = SessionStateMachine(session_id="s1")
        assert sm.state == SessionState.IDLE
        assert sm.session_id == "s1"
        assert not sm.is_terminal

    def test_idle_to_active_to_complete(self) -> None:
        """Test the normal flow."""
        sm = SessionStateMachine(session_id="s1")
        sm.to_active()
        assert sm.state == SessionState.ACTIVE
        sm.to_complete()
        assert sm.state == SessionState.COMPLETE
        assert sm.is_terminal

    def test_idle_to_complete(self) -> None:
        """Test an empty pool can complete without ever being active."""
        sm = SessionStateMachine(session_id="s1")
        sm.to_complete()
        assert sm.is_terminal

    def test_complete_is_terminal(self) -> None:
        """Test no transition leaves COMPLETE."""
        sm = SessionStateMachine(
            session_id="s1", initial_state=SessionState.COMPLETE
        )
        for target in SessionState:
            assert not sm.can_transition_to(target)

    def test_invalid_transition_raises(self) -> None:
        """Test illegal transitions raise with context."""
        sm = SessionStateMachine(session_id="s1")
        sm.to_active()

        with pytest.raises(PickerStateTransitionError) as exc_info:
            sm.to_active()

        assert exc_info.value.session_id == "s1"
        assert exc_info.value.from_state == SessionState.ACTIVE
        assert exc_info.value.to_state == SessionState.ACTIVE
        assert "ACTIVE -> ACTIVE" in str(exc_info.value)

    def test_restart_returns_to_idle(self) -> None:
        """Test restart re-opens a completed machine."""
        sm = SessionStateMachine(session_id="s1")
        sm.to_complete()

        sm.restart()

        assert sm.state == SessionState.IDLE
        sm.to_active()
        assert sm.state == SessionState.ACTIVE
