import enum

from ..errors import RCONError


class InvalidStateError(RCONError):
    """Raised when a client protocol is used out of turn, such as
    sending a second command before the first was answered, or
    receiving a reply while no command is pending.
    """

    current_state: enum.Enum
    """The state the protocol was in."""
    expected_states: tuple[enum.Enum, ...]
    """The states that would have allowed the operation."""
    pending_command: str | None
    """The command awaiting a reply at the time, if any."""

    def __init__(
        self,
        current_state: enum.Enum,
        expected_states: tuple[enum.Enum, ...],
        pending_command: str | None = None,
    ):
        self.current_state = current_state
        self.expected_states = expected_states
        self.pending_command = pending_command

        if pending_command is not None:
            reason = f"{pending_command!r} is still awaiting a reply"
        else:
            reason = "no command is awaiting a reply"

        expected = "/".join(s.name for s in expected_states)
        super().__init__(f"{reason} (state {current_state.name}, expected {expected})")
