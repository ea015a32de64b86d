"""Unit tests for the JSONL pipeline event log."""

import json

import pytest

from dossier.utils import event_logging
from dossier.utils.event_logging import (
    deduce_statuses_from_events,
    get_recent_events,
    log_pipeline_event,
    log_status_change,
)


@pytest.mark.unit
def test_events_are_appended_as_json_lines(isolated_storage):
    log_pipeline_event("registration", "sub-1", source="test", status="processing")
    log_pipeline_event("upload_stored", "sub-1", source="test", size=1024)

    lines = event_logging.PIPELINE_EVENTS_FILE.read_text().splitlines()
    assert len(lines) == 2
    event = json.loads(lines[1])
    assert event["event_type"] == "upload_stored"
    assert event["size"] == 1024
    assert event["timestamp"]


@pytest.mark.unit
def test_recent_events_filters(isolated_storage):
    for i in range(5):
        log_pipeline_event("registration", f"sub-{i}", source="test", status="processing")
    log_status_change("sub-3", "processing", "completed", source="test")

    assert len(get_recent_events(3)) == 3
    assert get_recent_events(3)[-1]["event_type"] == "status_change"
    assert [e["event_type"] for e in get_recent_events(submission_id="sub-3")] == [
        "registration",
        "status_change",
    ]
    assert len(get_recent_events(10, event_type="registration")) == 5


@pytest.mark.unit
def test_missing_log_has_no_events(isolated_storage):
    assert get_recent_events() == []
    assert deduce_statuses_from_events() == {}


@pytest.mark.unit
def test_malformed_lines_are_skipped(isolated_storage):
    log_pipeline_event("registration", "sub-1", source="test", status="processing")
    with open(event_logging.PIPELINE_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write("{not json\n")

    assert len(get_recent_events()) == 1


@pytest.mark.unit
def test_deduce_statuses(isolated_storage):
    log_pipeline_event("registration", "sub-1", source="test", status="processing")
    log_pipeline_event("registration", "sub-2", source="test", status="processing")
    log_status_change("sub-1", "processing", "completed", source="test")
    log_pipeline_event("upload_stored", "sub-2", source="test")

    statuses = deduce_statuses_from_events()

    assert statuses["sub-1"]["status"] == "completed"
    assert statuses["sub-2"]["status"] == "processing"


@pytest.mark.unit
def test_out_of_order_events_detected(isolated_storage):
    event_logging.PIPELINE_EVENTS_FILE.parent.mkdir(parents=True)
    events = [
        {"timestamp": "2026-10-09T15:46:00", "event_type": "registration",
         "submission_id": "sub-1", "source": "test", "status": "processing"},
        {"timestamp": "2026-10-09T15:45:00", "event_type": "status_change",
         "submission_id": "sub-1", "source": "test",
         "old_status": "processing", "new_status": "completed"},
    ]
    event_logging.PIPELINE_EVENTS_FILE.write_text("\n".join(json.dumps(e) for e in events))

    with pytest.raises(ValueError, match="chronological"):
        deduce_statuses_from_events()
