from dataclasses import dataclass

from study_tracker.services.ledger import Ledger


@dataclass
class EntryForm:
    """Pending text inputs for one "add course / session" action."""

    course: str = ""
    hours: str = ""
    minutes: str = ""
    note: str = ""

    def submit(self, ledger: Ledger) -> bool:
        """Send the fields to the ledger; clear them if anything was logged."""
        added = ledger.add_entry(self.course, self.hours, self.minutes, self.note)
        if added:
            self.clear()
        return added

    def clear(self) -> None:
        self.course = self.hours = self.minutes = self.note = ""
