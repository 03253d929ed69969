import threading

from jobboard.models.job import Job
from jobboard.models.application import JobApplication
from jobboard.services import applications as application_service
from jobboard.services import profiles as profile_service
from jobboard.utils.error_handlers import ConflictError
from jobboard.utils.security import hash_password


def _seed(session_factory) -> tuple[int, int]:
    db = session_factory()
    try:
        recruiter = profile_service.create_profile(
            db, email="rec@example.com", password_hash=hash_password("Testpass123!"), role="recruiter", full_name="R"
        )
        seeker = profile_service.create_profile(
            db, email="seeker@example.com", password_hash=hash_password("Testpass123!"), role="job_seeker", full_name="S"
        )
        job = Job(
            recruiter_id=recruiter.id,
            job_name="Backend Engineer",
            job_type="Full-time",
            job_description="APIs",
            number_of_candidates_needed=1,
            salary_min=1,
            salary_max=2,
            status="active",
        )
        db.add(job)
        db.commit()
        return job.id, seeker.id
    finally:
        db.close()


def test_concurrent_duplicate_submissions_store_one_row(session_factory):
    job_id, seeker_id = _seed(session_factory)
    workers = 8
    barrier = threading.Barrier(workers)
    outcomes: list[str] = []
    lock = threading.Lock()

    def submit():
        db = session_factory()
        try:
            job = db.get(Job, job_id)
            barrier.wait()
            try:
                application_service.create_application(
                    db, job=job, applicant_id=seeker_id, values={"full_name": "Same Person"}
                )
                result = "created"
            except ConflictError:
                result = "conflict"
            with lock:
                outcomes.append(result)
        finally:
            db.close()

    threads = [threading.Thread(target=submit) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert sorted(outcomes) == ["conflict"] * (workers - 1) + ["created"]

    db = session_factory()
    try:
        assert db.query(JobApplication).filter(JobApplication.job_id == job_id).count() == 1
    finally:
        db.close()


def test_different_applicants_can_apply_concurrently(session_factory):
    job_id, _ = _seed(session_factory)
    db = session_factory()
    try:
        seekers = [
            profile_service.create_profile(
                db, email=f"s{i}@example.com", password_hash="x", role="job_seeker", full_name=None
            ).id
            for i in range(4)
        ]
    finally:
        db.close()

    errors: list[Exception] = []

    def submit(applicant_id: int):
        db = session_factory()
        try:
            job = db.get(Job, job_id)
            application_service.create_application(db, job=job, applicant_id=applicant_id, values={})
        except Exception as e:  # noqa: BLE001
            errors.append(e)
        finally:
            db.close()

    threads = [threading.Thread(target=submit, args=(sid,)) for sid in seekers]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert errors == []
    db = session_factory()
    try:
        assert db.query(JobApplication).count() == 4
    finally:
        db.close()
