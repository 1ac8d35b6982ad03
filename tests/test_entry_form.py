from study_tracker.models import Course, Session
from study_tracker.services.entry_form import EntryForm


def test_submit_clears_fields(ledger):
    form = EntryForm(course="Math", hours="1", minutes="30", note="sets")
    assert form.submit(ledger) is True
    assert form == EntryForm()
    assert ledger.courses == (Course("Math", (Session(90, "sets"),)),)


def test_noop_submit_keeps_fields(ledger):
    form = EntryForm(course="  ", hours="1", minutes="30", note="x")
    assert form.submit(ledger) is False
    assert form == EntryForm(course="  ", hours="1", minutes="30", note="x")
    assert ledger.courses == ()
