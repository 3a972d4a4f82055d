import logging
import os
import uuid

import pytest
from fastapi.testclient import TestClient

from app.factory import create_app
from conftest import DOCX_MIME, PDF_MIME, FailingStore


def _pdf(size, name="resume.pdf"):
    return (name, b"%PDF" + b"0" * (size - 4), PDF_MIME)


def test_oversized_resume_is_rejected_before_store_write(make_job, submit, store, client):
    job = make_job()
    resp = submit(job=job, resume=_pdf(6 * 1024 * 1024))
    assert resp.status_code == 400
    assert "5MB limit" in resp.json()["error"]
    assert client.get("/api/applications").json() == []
    assert not os.path.exists(store.root)


def test_valid_resume_is_stored_and_application_recorded(client, make_job, submit, store):
    job = make_job(title="Senior Software Engineer")
    resp = submit(job=job, resume=_pdf(2 * 1024 * 1024, name="CV.pdf"),
                  phone="555-0100", cgpa="3.75", university="MIT", experienceYears="4")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    application_id = body["applicationId"]

    app_row = client.get(f"/api/applications/{application_id}").json()
    assert app_row["status"] == "Pending"
    assert app_row["cgpa"] == 3.75
    assert app_row["experienceYears"] == 4
    assert app_row["jobTitle"] == "Senior Software Engineer"
    key = app_row["resumeBlobPath"]
    assert key.endswith("_ada-lovelace_senior-software-engineer.pdf")
    assert store.exists(key)

    metadata = store.get_metadata(key)
    assert metadata["applicationid"] == application_id
    assert metadata["jobid"] == job["jobId"]
    assert metadata["applicantemail"] == "ada@example.com"
    assert metadata["originalfilename"] == "CV.pdf"


def test_submission_without_resume(client, submit):
    resp = submit()
    assert resp.status_code == 200
    row = client.get(f"/api/applications/{resp.json()['applicationId']}").json()
    assert row["resumeBlobPath"] is None
    assert row["jobId"] is None


def test_job_title_is_snapshotted_when_not_supplied(client, make_job):
    job = make_job(title="Data Scientist")
    resp = client.post("/api/applications", data={
        "fullName": "Grace Hopper", "email": "grace@example.com", "jobId": job["jobId"]})
    row = client.get(f"/api/applications/{resp.json()['applicationId']}").json()
    assert row["jobTitle"] == "Data Scientist"

    client.put(f"/api/jobs/{job['jobId']}", json={"title": "ML Scientist", "description": "x"})
    row = client.get(f"/api/applications/{resp.json()['applicationId']}").json()
    assert row["jobTitle"] == "Data Scientist"


def test_client_supplied_application_id_is_reused(client, submit):
    supplied = str(uuid.uuid4())
    resp = submit(applicationId=supplied)
    assert resp.json()["applicationId"] == supplied
    assert client.get(f"/api/applications/{supplied}").status_code == 200


def test_duplicate_application_id_fails(submit):
    supplied = str(uuid.uuid4())
    assert submit(applicationId=supplied).status_code == 200
    resp = submit(applicationId=supplied)
    assert resp.status_code == 500
    assert "already exists" in resp.json()["error"]


def test_failed_insert_leaves_uploaded_resume_and_logs_its_key(client, submit, store, caplog):
    supplied = str(uuid.uuid4())
    first = submit(applicationId=supplied, resume=_pdf(1024))
    assert first.status_code == 200

    with caplog.at_level(logging.WARNING, logger="domain.services.application_records"):
        resp = submit(applicationId=supplied, resume=_pdf(1024))
    assert resp.status_code == 500
    assert "already exists" in resp.json()["error"]

    orphaned = [r for r in caplog.records
                if r.levelno == logging.WARNING and "orphaned" in r.getMessage()]
    assert len(orphaned) == 1
    key = orphaned[0].args[1]
    assert key in orphaned[0].getMessage()
    assert store.exists(key)
    assert store.get_metadata(key)["applicationid"] == supplied

    # the recorded row still points at the first upload
    row = client.get(f"/api/applications/{supplied}").json()
    assert row["resumeBlobPath"].endswith("_ada-lovelace_job.pdf")


def test_malformed_application_id_is_rejected(submit):
    assert submit(applicationId="not-a-uuid").status_code == 400


def test_name_and_email_are_required(client):
    resp = client.post("/api/applications", data={"fullName": "  ", "email": "a@b.c"})
    assert resp.status_code == 400
    assert "required" in resp.json()["error"]
    resp = client.post("/api/applications", data={"fullName": "A"})
    assert resp.status_code == 400


@pytest.mark.parametrize("cgpa", ["0", "0.00", "2.5", "4", "4.00"])
def test_cgpa_inside_range_is_accepted(submit, cgpa):
    assert submit(cgpa=cgpa).status_code == 200


def test_cgpa_is_rounded_to_two_decimals(client, submit):
    resp = submit(cgpa="3.333")
    assert resp.status_code == 200
    row = client.get(f"/api/applications/{resp.json()['applicationId']}").json()
    assert row["cgpa"] == 3.33


@pytest.mark.parametrize("cgpa", ["-0.01", "-1", "4.01", "5"])
def test_cgpa_outside_range_is_rejected(submit, cgpa):
    resp = submit(cgpa=cgpa)
    assert resp.status_code == 400
    assert "cgpa" in resp.json()["error"]


@pytest.mark.parametrize("years", ["-1", "2.5", "many"])
def test_experience_years_must_be_non_negative_integer(submit, years):
    assert submit(experienceYears=years).status_code == 400


def test_unsupported_file_type_is_rejected(submit, store):
    resp = submit(resume=("notes.txt", b"hello", "text/plain"))
    assert resp.status_code == 400
    assert "PDF and DOCX" in resp.json()["error"]


def test_slash_in_filename_extension_does_not_reach_key(client, submit, store):
    resp = submit(resume=("cv.pd/f", b"%PDF-1.7", PDF_MIME))
    assert resp.status_code == 200, resp.text
    key = client.get(f"/api/applications/{resp.json()['applicationId']}").json()["resumeBlobPath"]
    assert key.endswith("_ada-lovelace_job.pdf")
    assert "/" not in key
    assert store.exists(key)


def test_docx_is_stored_with_pdf_extension(client, submit, store):
    resp = submit(resume=("cv.docx", b"PK\x03\x04docx", DOCX_MIME))
    assert resp.status_code == 200
    row = client.get(f"/api/applications/{resp.json()['applicationId']}").json()
    assert row["resumeBlobPath"].endswith("_ada-lovelace_job.pdf")
    assert store.get_metadata(row["resumeBlobPath"])["originalfilename"] == "cv.docx"


def test_store_failure_aborts_submission(settings):
    failing = FailingStore()
    client = TestClient(create_app(settings, object_store=failing))
    resp = client.post("/api/applications",
                       data={"fullName": "A", "email": "a@b.c"},
                       files={"resumeFile": _pdf(1024)})
    assert resp.status_code == 500
    assert "object store unreachable" in resp.json()["error"]
    assert failing.calls == 1
    assert client.get("/api/applications").json() == []


def test_approve_pending_application(client, submit):
    application_id = submit().json()["applicationId"]
    resp = client.patch(f"/api/applications/{application_id}/status",
                        json={"status": "Approved", "reviewedBy": "hr@example.com"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Application approved successfully"

    row = client.get(f"/api/applications/{application_id}").json()
    assert row["status"] == "Approved"
    assert row["reviewedBy"] == "hr@example.com"
    assert row["reviewedAt"] is not None


def test_decided_application_can_be_decided_again_by_default(client, submit):
    application_id = submit().json()["applicationId"]
    client.patch(f"/api/applications/{application_id}/status", json={"status": "Rejected"})
    resp = client.patch(f"/api/applications/{application_id}/status", json={"status": "Approved"})
    assert resp.status_code == 200
    assert client.get(f"/api/applications/{application_id}").json()["status"] == "Approved"


def test_redecision_can_be_disabled(settings, store):
    settings = settings.model_copy(update={"ALLOW_STATUS_REDECISION": False})
    client = TestClient(create_app(settings, object_store=store))
    application_id = client.post(
        "/api/applications", data={"fullName": "A", "email": "a@b.c"}).json()["applicationId"]
    assert client.patch(f"/api/applications/{application_id}/status",
                        json={"status": "Rejected"}).status_code == 200
    resp = client.patch(f"/api/applications/{application_id}/status", json={"status": "Approved"})
    assert resp.status_code == 409
    assert client.get(f"/api/applications/{application_id}").json()["status"] == "Rejected"


@pytest.mark.parametrize("status", ["Pending", "approved", "", None])
def test_invalid_status_is_rejected(client, submit, status):
    application_id = submit().json()["applicationId"]
    resp = client.patch(f"/api/applications/{application_id}/status", json={"status": status})
    assert resp.status_code == 400
    assert "Approved or Rejected" in resp.json()["error"]


def test_status_update_for_unknown_application_is_404(client):
    resp = client.patch(f"/api/applications/{uuid.uuid4()}/status", json={"status": "Approved"})
    assert resp.status_code == 404
    assert client.get(f"/api/applications/{uuid.uuid4()}").status_code == 404


def test_filter_by_status_returns_exactly_matching_set(client, submit):
    ids = [submit(fullName=f"Candidate {i}").json()["applicationId"] for i in range(5)]
    client.patch(f"/api/applications/{ids[0]}/status", json={"status": "Approved"})
    client.patch(f"/api/applications/{ids[1]}/status", json={"status": "Rejected"})
    client.patch(f"/api/applications/{ids[2]}/status", json={"status": "Approved"})

    pending = {a["applicationId"] for a in
               client.get("/api/applications/filter", params={"status": "Pending"}).json()}
    approved = {a["applicationId"] for a in
                client.get("/api/applications/filter", params={"status": "Approved"}).json()}
    assert pending == {ids[3], ids[4]}
    assert approved == {ids[0], ids[2]}


def test_filter_search_is_case_insensitive_and_conjunctive(client, make_job, submit):
    eng = make_job(title="Backend Engineer")
    design = make_job(title="Product Designer")
    submit(job=eng, fullName="Alan Turing", university="Cambridge")
    submit(job=design, fullName="Alan Kay", university="Utah")
    submit(job=eng, fullName="Barbara Liskov", university="Stanford")

    names = lambda params: sorted(a["candidateName"] for a in
                                  client.get("/api/applications/filter", params=params).json())
    assert names({"search": "alan"}) == ["Alan Kay", "Alan Turing"]
    assert names({"search": "ENGINEER"}) == ["Alan Turing", "Barbara Liskov"]
    assert names({"search": "cambridge"}) == ["Alan Turing"]
    assert names({"search": "alan", "jobId": eng["jobId"]}) == ["Alan Turing"]
    assert names({"search": "", "status": ""}) == ["Alan Kay", "Alan Turing", "Barbara Liskov"]


def test_list_by_job(client, make_job, submit):
    a, b = make_job(title="A"), make_job(title="B")
    submit(job=a)
    submit(job=a)
    submit(job=b)
    assert len(client.get(f"/api/applications/job/{a['jobId']}").json()) == 2
    assert len(client.get(f"/api/applications/job/{b['jobId']}").json()) == 1
    assert len(client.get("/api/applications").json()) == 3


def test_statistics(client, make_job, submit):
    busy = make_job(title="Busy")
    idle = make_job(title="Idle")
    first = submit(job=busy).json()["applicationId"]
    second = submit(job=busy).json()["applicationId"]
    submit(job=busy)
    submit()
    client.patch(f"/api/applications/{first}/status", json={"status": "Approved"})
    client.patch(f"/api/applications/{second}/status", json={"status": "Rejected"})

    stats = client.get("/api/applications/stats/summary").json()
    assert stats["summary"] == {"total": 4, "pending": 2, "approved": 1, "rejected": 1}
    assert stats["byJob"] == [
        {"jobId": busy["jobId"], "jobTitle": "Busy", "totalApplications": 3,
         "pending": 1, "approved": 1, "rejected": 1},
        {"jobId": idle["jobId"], "jobTitle": "Idle", "totalApplications": 0,
         "pending": 0, "approved": 0, "rejected": 0},
    ]


def test_statistics_on_empty_store(client):
    stats = client.get("/api/applications/stats/summary").json()
    assert stats == {"summary": {"total": 0, "pending": 0, "approved": 0, "rejected": 0},
                     "byJob": []}
