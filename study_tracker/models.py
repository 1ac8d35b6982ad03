import re
from dataclasses import dataclass, field

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int(text: str | None) -> int:
    """Parse the leading base-10 integer of ``text``; anything else is 0.

    Only ASCII digits count. ``"12abc"`` -> 12, ``" 7"`` -> 7, ``"1.5"`` -> 1,
    ``""`` / ``"abc"`` -> 0. A digit run too long for ``int()`` is also 0.
    """
    match = _LEADING_INT.match(text or "")
    if not match:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        return 0


@dataclass(frozen=True)
class Session:
    time: int  # minutes
    note: str = ""

    def to_dict(self) -> dict:
        return {"time": self.time, "note": self.note}

    @classmethod
    def from_dict(cls, raw: dict) -> "Session":
        time = raw.get("time") or 0
        if isinstance(time, bool) or not isinstance(time, int):
            time = parse_int(str(time))
        return cls(time=time, note=raw.get("note") or "")


@dataclass(frozen=True)
class Course:
    name: str
    sessions: tuple[Session, ...] = field(default_factory=tuple)

    @property
    def total_time(self) -> int:
        return sum(s.time for s in self.sessions)

    def to_dict(self) -> dict:
        return {"name": self.name, "sessions": [s.to_dict() for s in self.sessions]}

    @classmethod
    def from_dict(cls, raw: dict) -> "Course":
        """Build a course from its persisted record.

        Older records may lack ``sessions`` (or carry ``null``); those load
        as a course with no sessions.
        """
        sessions = raw.get("sessions") or []
        return cls(
            name=raw["name"],
            sessions=tuple(Session.from_dict(s) for s in sessions),
        )
