import json
import threading
from dataclasses import dataclass
from datetime import timedelta

import pytest

from contestcore.job import (
    Job,
    JobDescriptor,
    JobReport,
    Report,
    Reporter,
    ReporterBundle,
    ReporterConfig,
    Reporting,
    Request,
    RunCoordinates,
    RunStatus,
    Status,
    TargetStatus,
    TestCoordinates,
    TestStatus,
    TestStepCoordinates,
    TestStepStatus,
)


def test_job_not_cancelled_by_default():
    job = Job(id=1, name="job")
    assert job.is_cancelled() is False


def test_job_cancel_marks_cancelled():
    job = Job(id=1)
    job.cancel()
    assert job.is_cancelled() is True
    assert job.cancel_event.is_set()


def test_job_cancel_twice_raises():
    job = Job(id=1)
    job.cancel()
    with pytest.raises(RuntimeError):
        job.cancel()


def test_job_pause_does_not_cancel():
    job = Job(id=1)
    job.pause()
    assert job.pause_event.is_set()
    assert job.is_cancelled() is False


def test_job_pause_twice_raises():
    job = Job()
    job.pause()
    with pytest.raises(RuntimeError):
        job.pause()


def test_job_cancel_seen_from_other_thread():
    job = Job()
    seen = []

    def watch():
        job.cancel_event.wait(5)
        seen.append(job.is_cancelled())

    worker = threading.Thread(target=watch)
    worker.start()
    job.cancel()
    worker.join()
    assert seen == [True]
    assert job.is_cancelled() is True


def test_jobs_have_independent_signals():
    first, second = Job(id=1), Job(id=2)
    first.cancel()
    assert second.is_cancelled() is False


def test_job_descriptor_defaults():
    jd = JobDescriptor(job_name="name")
    assert jd.runs == 0
    assert jd.run_interval == timedelta(0)
    assert jd.reporting.run_reporters == []
    assert jd.reporting.final_reporters == []


def test_reporting_holds_configs():
    cfg = ReporterConfig(name="TargetSuccess", parameters='{"a": 1}')
    reporting = Reporting(run_reporters=[cfg])
    assert reporting.run_reporters[0].name == "TargetSuccess"
    assert json.loads(reporting.run_reporters[0].parameters) == {"a": 1}


def test_report_to_json_no_html_escaping():
    report = Report(reporter_name="r", success=True, data={"msg": "<a&b>"})
    out = report.to_json()
    assert out.endswith(b"\n")
    assert b"<a&b>" in out
    assert json.loads(out) == {"msg": "<a&b>"}


def test_report_to_json_none():
    assert json.loads(Report().to_json()) is None


def test_report_to_json_dataclass():
    @dataclass
    class Payload:
        passed: int
        names: list

    out = Report(data=Payload(3, ["x"])).to_json()
    assert json.loads(out) == {"passed": 3, "names": ["x"]}


def test_report_to_json_rejects_nan():
    with pytest.raises(ValueError):
        Report(data=float("nan")).to_json()


def test_job_report_defaults():
    report = JobReport(job_id=7)
    assert report.job_id == 7
    assert report.run_reports == []
    assert report.final_reports == []


def test_reporter_is_abstract():
    with pytest.raises(TypeError):
        Reporter()


def test_reporter_subclass_and_bundle():
    class Always(Reporter):
        name = "always"

        def validate_run_parameters(self, parameters):
            return json.loads(parameters)

        def validate_final_parameters(self, parameters):
            return None

        def run_report(self, cancel, parameters, run_status, ev):
            return True, parameters

        def final_report(self, cancel, parameters, run_statuses, ev):
            return False, len(run_statuses)

    reporter = Always()
    bundle = ReporterBundle(reporter, reporter.validate_run_parameters(b'{"k": 2}'))
    ok, data = bundle.reporter.run_report(threading.Event(), bundle.parameters, RunStatus(), None)
    assert ok is True
    assert data == {"k": 2}
    assert reporter.final_report(threading.Event(), None, [RunStatus()], None) == (False, 1)


def test_coordinates_hierarchy():
    coords = TestStepCoordinates(job_id=1, run_id=2, test_name="t", test_step_label="l")
    assert isinstance(coords, TestCoordinates)
    assert isinstance(coords, RunCoordinates)
    assert (coords.job_id, coords.run_id, coords.test_name) == (1, 2, "t")


def test_target_status_carries_coordinates():
    status = TargetStatus(job_id=4, test_step_label="step", error="boom")
    assert isinstance(status, TestStepCoordinates)
    assert status.job_id == 4
    assert status.events == []
    assert status.error == "boom"


def test_status_nesting():
    step = TestStepStatus(test_step_label="s", target_statuses=[TargetStatus(target="t1")])
    test = TestStatus(test_name="t", test_step_statuses=[step])
    run = RunStatus(job_id=1, run_id=1, test_statuses=[test])
    status = Status(name="job", state="JobStateStarted", run_status=run)
    assert status.run_status.test_statuses[0].test_step_statuses[0].target_statuses[0].target == "t1"
    assert status.end_time is None
    assert status.job_report is None


def test_request_fields():
    req = Request(job_id=3, job_name="n", requestor="me", job_descriptor="{}")
    assert req.job_id == 3
    assert req.test_descriptors == ""
    assert req.request_time is None