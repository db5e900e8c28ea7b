"""Session identity and the string key used to persist per-session records."""

from dataclasses import dataclass

from ..exceptions import ValidationError


@dataclass(frozen=True)
class SessionIdentity:
    """
    Identifies one planned session within one week.

    Session ids embed underscores themselves (``w3_run_tempo_20min``), so the
    persisted key ``f"{session_id}_{week_number}"`` is parsed by splitting on
    the last underscore only.
    """
    session_id: str
    week_number: int

    @property
    def key(self) -> str:
        return f"{self.session_id}_{self.week_number}"

    @classmethod
    def from_key(cls, key: str) -> "SessionIdentity":
        """Parse a persisted key back into an identity.

        Raises:
            ValidationError: If the key has no week suffix.
        """
        session_id, sep, week = key.rpartition("_")
        if not sep or not session_id:
            raise ValidationError(f"Malformed session key: {key!r}", field="key")
        try:
            week_number = int(week)
        except ValueError:
            raise ValidationError(f"Malformed session key: {key!r}", field="key")
        return cls(session_id=session_id, week_number=week_number)

    def __str__(self) -> str:
        return self.key
