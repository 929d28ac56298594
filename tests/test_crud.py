"""
Tests for the CRUD layer against the test database.

Tests cover:
- Company create / find_all / get / update / remove
- Job create / find_all / get / update / remove
- User update and remove
"""

import pytest

from app.core.exceptions import BadRequestError, NotFoundError
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models.company import Company
from app.schemas.company import CompanyCreateRequest
from app.schemas.job import JobCreateRequest


class TestCompanyCrud:
    """Tests for company repository functions"""

    def test_create(self, db_session, seed):
        company = company_crud.create(db_session, CompanyCreateRequest(
            handle="new", name="New", description="New Description", numEmployees=1, logoUrl="http://new.img"
        ))

        assert company.handle == "new"
        assert company.num_employees == 1
        assert company_crud.get(db_session, "new").logo_url == "http://new.img"

    def test_create_duplicate(self, db_session, seed):
        with pytest.raises(BadRequestError) as exc_info:
            company_crud.create(db_session, CompanyCreateRequest(handle="c1", name="Other"))

        assert exc_info.value.message == "Duplicate company: c1"

    def test_find_all_no_filter(self, db_session, seed):
        companies = company_crud.find_all(db_session)
        assert [c.handle for c in companies] == ["c1", "c2", "c3"]

    def test_find_all_name_like_is_case_insensitive(self, db_session, seed):
        companies = company_crud.find_all(db_session, {"nameLike": "c2"})
        assert [c.handle for c in companies] == ["c2"]

    def test_find_all_employee_range(self, db_session, seed):
        companies = company_crud.find_all(db_session, {"minEmployees": 2, "maxEmployees": 3})
        assert [c.handle for c in companies] == ["c2", "c3"]

    def test_find_all_zero_bound_excludes_unknown_size(self, db_session, seed):
        db_session.add(Company(handle="cn", name="CN", description="No size"))
        db_session.commit()

        companies = company_crud.find_all(db_session, {"minEmployees": 0})
        assert [c.handle for c in companies] == ["c1", "c2", "c3"]

        companies = company_crud.find_all(db_session)
        assert "cn" in [c.handle for c in companies]

    def test_find_all_inverted_range(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.find_all(db_session, {"minEmployees": 3, "maxEmployees": 1})

    def test_get_includes_jobs(self, db_session, seed):
        company = company_crud.get(db_session, "c1")

        assert company.name == "C1"
        assert sorted(job.title for job in company.jobs) == ["j3", "job1"]

    def test_get_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError) as exc_info:
            company_crud.get(db_session, "nope")

        assert exc_info.value.message == "No company: nope"

    def test_update(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"name": "New", "numEmployees": 10})

        assert company == {
            "handle": "c1",
            "name": "New",
            "description": "Desc1",
            "num_employees": 10,
            "logo_url": "http://c1.img",
        }

    def test_update_null_fields(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"numEmployees": None, "logoUrl": None})

        assert company["num_employees"] is None
        assert company["logo_url"] is None

    def test_update_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "x"})

    def test_update_no_data(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {})

    def test_remove(self, db_session, seed):
        company_crud.remove(db_session, "c1")

        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "c1")
        assert [job.title for job in job_crud.find_all(db_session)] == ["job2"]

    def test_remove_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")


class TestJobCrud:
    """Tests for job repository functions"""

    def test_create(self, db_session, seed):
        job = job_crud.create(db_session, JobCreateRequest(
            title="test job", salary=200000, equity=0.5, companyHandle="c1"
        ))

        assert job.id is not None
        assert job.title == "test job"
        assert job.equity == pytest.approx(0.5)
        assert job.company_handle == "c1"

    def test_create_unknown_company(self, db_session, seed):
        with pytest.raises(BadRequestError):
            job_crud.create(db_session, JobCreateRequest(title="x", companyHandle="nope"))

    def test_find_all_no_filter(self, db_session, seed):
        jobs = job_crud.find_all(db_session)
        assert [j.title for j in jobs] == ["j3", "job1", "job2"]

    def test_find_all_all_filters(self, db_session, seed):
        jobs = job_crud.find_all(db_session, {"title": "1", "minSalary": 10000, "hasEquity": True})
        assert [j.title for j in jobs] == ["job1"]

    def test_find_all_title(self, db_session, seed):
        jobs = job_crud.find_all(db_session, {"title": "JOB"})
        assert [j.title for j in jobs] == ["job1", "job2"]

    def test_find_all_min_salary(self, db_session, seed):
        jobs = job_crud.find_all(db_session, {"minSalary": 50000})
        assert [j.title for j in jobs] == ["j3", "job2"]

    def test_find_all_has_equity(self, db_session, seed):
        jobs = job_crud.find_all(db_session, {"hasEquity": True})
        assert [j.title for j in jobs] == ["job1", "job2"]

    def test_find_all_has_equity_false(self, db_session, seed):
        jobs = job_crud.find_all(db_session, {"hasEquity": False})
        assert len(jobs) == 3

    def test_get(self, db_session, seed):
        job_id = seed["job_ids"][0]
        job = job_crud.get(db_session, job_id)

        assert job.title == "job1"
        assert job.company_handle == "c1"

    def test_get_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError) as exc_info:
            job_crud.get(db_session, 99999)

        assert exc_info.value.message == "No job: 99999"

    def test_update(self, db_session, seed):
        job_id = seed["job_ids"][0]
        job = job_crud.update(db_session, job_id, {"title": "New", "salary": 20000})

        assert job["id"] == job_id
        assert job["title"] == "New"
        assert job["salary"] == 20000
        assert job["company_handle"] == "c1"

    def test_update_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, 99999, {"title": "x"})

    def test_remove(self, db_session, seed):
        job_id = seed["job_ids"][1]
        job_crud.remove(db_session, job_id)

        with pytest.raises(NotFoundError):
            job_crud.get(db_session, job_id)


class TestUserCrud:
    """Tests for user repository functions"""

    def test_find_all(self, db_session, seed):
        assert [u.username for u in user_crud.find_all(db_session)] == ["u1", "u2"]

    def test_update_translates_names(self, db_session, seed):
        user = user_crud.update(db_session, "u2", {"firstName": "New", "isAdmin": True})

        assert user["first_name"] == "New"
        assert bool(user["is_admin"]) is True
        assert user["last_name"] == "U2L"

    def test_update_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            user_crud.update(db_session, "nope", {"firstName": "x"})

    def test_remove(self, db_session, seed):
        user_crud.remove(db_session, "u2")

        with pytest.raises(NotFoundError):
            user_crud.get(db_session, "u2")
