"""
Tests for services/job_service.py - job storage access.
"""

import pytest

from jobly.errors import BadRequestError, NoDataError, NotFoundError
from jobly.models import Job
from jobly.services import job_service


class TestCreate:

    def test_create_job(self, db_session):
        new_job = {"title": "NJ1", "salary": 50000, "equity": 0.45, "companyHandle": "c3"}

        job = job_service.create(db_session, new_job)

        assert isinstance(job["id"], int)
        assert {k: v for k, v in job.items() if k != "id"} == new_job
        stored = db_session.query(Job).filter_by(title="NJ1").all()
        assert len(stored) == 1
        assert stored[0].company_handle == "c3"

    def test_duplicate_job_fails(self, db_session):
        new_job = {"title": "NJ1", "salary": 50000, "equity": 0.45, "companyHandle": "c3"}
        job_service.create(db_session, new_job)

        with pytest.raises(BadRequestError, match="Duplicate job"):
            job_service.create(db_session, new_job)

    def test_same_title_other_company_ok(self, db_session):
        job = job_service.create(db_session, {"title": "J1", "companyHandle": "c3"})
        assert job["companyHandle"] == "c3"
        assert job["salary"] is None

    def test_unknown_company_fails(self, db_session):
        with pytest.raises(BadRequestError, match="No company"):
            job_service.create(db_session, {"title": "NJ", "companyHandle": "nope"})


class TestFindAll:

    def test_no_filter(self, db_session, job_ids):
        jobs = job_service.find_all(db_session)
        assert jobs == [
            {"id": job_ids["J1"], "title": "J1", "salary": 100000, "equity": None, "companyHandle": "c2"},
            {"id": job_ids["J2"], "title": "J2", "salary": 70000, "equity": 0.04, "companyHandle": "c1"},
        ]

    def test_min_salary(self, db_session):
        jobs = job_service.find_all(db_session, {"minSalary": 75000})
        assert [j["title"] for j in jobs] == ["J1"]

    def test_has_equity(self, db_session):
        jobs = job_service.find_all(db_session, {"hasEquity": True})
        assert [j["title"] for j in jobs] == ["J2"]

    def test_company_filters_ignored(self, db_session):
        jobs = job_service.find_all(db_session, {"nameLike": "zzz"})
        assert len(jobs) == 2


class TestGet:

    def test_get_includes_company(self, db_session, job_ids):
        job = job_service.get(db_session, job_ids["J1"])
        assert job == {
            "id": job_ids["J1"],
            "title": "J1",
            "salary": 100000,
            "equity": None,
            "company": {
                "handle": "c2",
                "name": "C2",
                "numEmployees": 2,
                "description": "Desc2",
                "logoUrl": "http://c2.img",
            },
        }

    def test_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            job_service.get(db_session, 0)


class TestUpdate:

    def test_update(self, db_session, job_ids):
        job_id = job_ids["J1"]
        job = job_service.update(db_session, job_id, {"title": "J1a", "salary": 500, "equity": 0.89})

        assert job == {"id": job_id, "title": "J1a", "salary": 500, "equity": 0.89, "companyHandle": "c2"}
        assert db_session.get(Job, job_id).title == "J1a"

    def test_update_null_fields(self, db_session, job_ids):
        job_id = job_ids["J2"]
        job = job_service.update(db_session, job_id, {"title": "J2a", "salary": None, "equity": None})

        assert job == {"id": job_id, "title": "J2a", "salary": None, "equity": None, "companyHandle": "c1"}

    def test_update_leaves_other_fields(self, db_session, job_ids):
        job = job_service.update(db_session, job_ids["J2"], {"salary": 1})
        assert job["title"] == "J2"
        assert job["equity"] == 0.04

    def test_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            job_service.update(db_session, 0, {"title": "nope"})

    def test_no_data(self, db_session, job_ids):
        with pytest.raises(NoDataError):
            job_service.update(db_session, job_ids["J1"], {})

    def test_constraint_violation_is_bad_request(self, db_session, job_ids):
        with pytest.raises(BadRequestError):
            job_service.update(db_session, job_ids["J1"], {"title": None})


class TestRemove:

    def test_remove(self, db_session, job_ids):
        job_service.remove(db_session, job_ids["J1"])
        assert db_session.get(Job, job_ids["J1"]) is None

    def test_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            job_service.remove(db_session, 0)
