"""Tests for scheduler job statistics."""

from bidtracker.scheduler.job_stats import JobStatsTracker


def test_outcomes_are_recorded_per_run_and_in_total():
    tracker = JobStatsTracker()
    tracker.register_job("send_reminders", "Send Deadline Reminders")

    tracker.start_run("send_reminders")
    tracker.finish_run("send_reminders", processed=2, outcomes={"sent": 2, "skipped-no-config": 1})
    tracker.start_run("send_reminders")
    tracker.finish_run("send_reminders", processed=0, outcomes={"failed-transport-error": 1})

    stats = tracker.to_dict("send_reminders")
    assert stats["total_runs"] == 2
    assert stats["total_processed"] == 2
    assert stats["total_outcomes"] == {
        "sent": 2,
        "skipped-no-config": 1,
        "failed-transport-error": 1,
    }
    assert stats["last_run"]["outcomes"] == {"failed-transport-error": 1}


def test_failed_run_keeps_error():
    tracker = JobStatsTracker()
    tracker.start_run("send_reminders")
    tracker.finish_run("send_reminders", error="database unavailable")

    stats = tracker.to_dict("send_reminders")
    assert stats["last_run"]["success"] is False
    assert stats["last_error"] == "database unavailable"


def test_unknown_job_is_empty():
    assert JobStatsTracker().to_dict("missing") == {}
