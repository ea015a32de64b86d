"""Unit tests for the submission registry CSV."""

import pytest

from dossier.utils.event_logging import get_recent_events
from dossier.utils.submission_registry import (
    count_submissions,
    get_all_submissions,
    get_submission_record,
    list_submissions_by_status,
    register_submission,
    set_generated_pdf_path,
    submission_is_registered,
    update_submission_status,
)


def _record(submission_id, status="processing"):
    return {
        "submission_id": submission_id,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "job_description": "Senior engineer with 5 years experience",
        "status": status,
    }


@pytest.mark.unit
def test_register_and_read_back(isolated_storage):
    register_submission(_record("sub-0000000001"), source="test")

    record = get_submission_record("sub-0000000001")
    assert record["first_name"] == "Ada"
    assert record["phone"] == ""
    assert record["status"] == "processing"
    assert record["created_at"]
    assert submission_is_registered("sub-0000000001")
    assert not submission_is_registered("sub-unknown")


@pytest.mark.unit
def test_register_logs_registration_event(isolated_storage):
    register_submission(_record("sub-0000000001"), source="test")

    events = get_recent_events(submission_id="sub-0000000001")
    assert [e["event_type"] for e in events] == ["registration"]
    assert events[0]["status"] == "processing"
    assert events[0]["source"] == "test"


@pytest.mark.unit
def test_duplicate_registration_rejected(isolated_storage):
    register_submission(_record("sub-0000000001"), source="test")
    with pytest.raises(ValueError, match="already registered"):
        register_submission(_record("sub-0000000001"), source="test")


@pytest.mark.unit
def test_unknown_status_rejected(isolated_storage):
    with pytest.raises(ValueError, match="Unknown submission status"):
        register_submission(_record("sub-0000000001", status="archived"), source="test")
    with pytest.raises(ValueError):
        update_submission_status({"sub-0000000001": "archived"}, source="test")


@pytest.mark.unit
def test_update_status(isolated_storage):
    register_submission(_record("sub-0000000001"), source="test")
    register_submission(_record("sub-0000000002"), source="test")

    result = update_submission_status(
        {"sub-0000000001": "completed", "sub-missing": "failed"}, source="test", pages=2
    )

    assert result == {"sub-0000000001": True, "sub-missing": False}
    assert get_submission_record("sub-0000000001")["status"] == "completed"
    assert get_submission_record("sub-0000000002")["status"] == "processing"

    change = get_recent_events(1, event_type="status_change")[0]
    assert change["old_status"] == "processing"
    assert change["new_status"] == "completed"
    assert change["pages"] == 2


@pytest.mark.unit
def test_set_generated_pdf_path(isolated_storage, tmp_path):
    register_submission(_record("sub-0000000001"), source="test")

    assert set_generated_pdf_path("sub-0000000001", tmp_path / "out.pdf")
    assert get_submission_record("sub-0000000001")["generated_pdf_path"] == str(
        tmp_path / "out.pdf"
    )
    assert not set_generated_pdf_path("sub-missing", tmp_path / "out.pdf")


@pytest.mark.unit
def test_listing_and_counts(isolated_storage):
    register_submission(_record("sub-0000000001"), source="test")
    register_submission(_record("sub-0000000002", status="failed"), source="test")
    register_submission(_record("sub-0000000003", status="failed"), source="test")

    assert len(get_all_submissions()) == 3
    assert [r["submission_id"] for r in list_submissions_by_status("failed")] == [
        "sub-0000000002",
        "sub-0000000003",
    ]

    counts = count_submissions()
    assert counts["total"] == 3
    assert counts["by_status"]["failed"] == 2
    assert counts["by_status"]["completed"] == 0


@pytest.mark.unit
def test_job_description_with_newlines_and_commas_survives(isolated_storage):
    record = _record("sub-0000000001")
    record["job_description"] = 'Line one, with commas\n\nLine "two"'
    register_submission(record, source="test")

    assert get_submission_record("sub-0000000001")["job_description"] == record["job_description"]
