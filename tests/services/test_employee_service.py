"""
Tests for employee record orchestration
"""

from unittest.mock import AsyncMock

import pytest
from bson import ObjectId

from roster.database.errors import DuplicateKey, SchemaViolation
from roster.errors import (
    AlreadyExists,
    BadRequest,
    ErrorKind,
    InvalidId,
    NotFound,
    ValidationFailed,
)
from roster.services import EmployeeService


def _employee(**overrides):
    data = {
        "first_name": "Ann",
        "last_name": "Lee",
        "email": "ann@x.com",
        "designation": "Dev",
        "salary": 50000,
        "date_of_joining": "2024-01-01",
        "department": "Eng",
    }
    data.update(overrides)
    return data


class TestAddEmployee:
    @pytest.mark.asyncio
    async def test_stores_normalized_email(self, services, employee_input):
        view = await services.employees.add_employee(employee_input)

        assert view["email"] == "ann@x.com"
        assert view["first_name"] == "Ann"
        assert view["salary"] == 50000.0
        assert view["gender"] is None
        assert view["employee_photo"] is None
        assert view["date_of_joining"] == "2024-01-01T00:00:00+00:00"
        assert ObjectId.is_valid(view["id"])

    @pytest.mark.asyncio
    async def test_resubmitting_email_in_any_case(self, services, gateway, employee_input):
        await services.employees.add_employee(employee_input)

        with pytest.raises(AlreadyExists) as excinfo:
            await services.employees.add_employee(_employee(email="ANN@x.COM", first_name="Other"))

        assert excinfo.value.kind is ErrorKind.ALREADY_EXISTS
        assert len(gateway.employees) == 1

    @pytest.mark.asyncio
    async def test_salary_floor(self, services):
        with pytest.raises(ValidationFailed):
            await services.employees.add_employee(_employee(salary=999))

        view = await services.employees.add_employee(_employee(salary=1000))
        assert view["salary"] == 1000.0

    @pytest.mark.asyncio
    async def test_storage_duplicate_is_already_exists(self):
        gateway = AsyncMock()
        gateway.find_employee_by_email.return_value = None
        gateway.create_employee.side_effect = DuplicateKey("email")

        with pytest.raises(AlreadyExists):
            await EmployeeService(gateway).add_employee(_employee())

    @pytest.mark.asyncio
    async def test_storage_schema_violation_is_validation_failed(self):
        gateway = AsyncMock()
        gateway.find_employee_by_email.return_value = None
        gateway.create_employee.side_effect = SchemaViolation(["Salary must be at least 1000"])

        with pytest.raises(ValidationFailed) as excinfo:
            await EmployeeService(gateway).add_employee(_employee())

        assert excinfo.value.errors == ["Salary must be at least 1000"]


class TestUpdateEmployee:
    @pytest.mark.asyncio
    async def test_only_salary_changes(self, services, employee_input):
        created = await services.employees.add_employee(
            {**employee_input, "gender": "Female", "employee_photo": "http://img/ann.png"}
        )

        updated = await services.employees.update_employee_by_eid(created["id"], {"salary": 2000})

        assert updated["salary"] == 2000.0
        unchanged = {k: v for k, v in created.items() if k not in ("salary", "updatedAt")}
        assert {k: updated[k] for k in unchanged} == unchanged
        assert updated["updatedAt"] > created["updatedAt"]

    @pytest.mark.asyncio
    async def test_invalid_id_checked_before_input(self, services):
        with pytest.raises(InvalidId) as excinfo:
            await services.employees.update_employee_by_eid("not-an-id", {"salary": 1})

        assert excinfo.value.kind is ErrorKind.INVALID_ID

    @pytest.mark.asyncio
    async def test_unknown_id(self, services):
        with pytest.raises(NotFound):
            await services.employees.update_employee_by_eid(str(ObjectId()), {"salary": 2000})

    @pytest.mark.asyncio
    async def test_invalid_fields(self, services, employee_input):
        created = await services.employees.add_employee(employee_input)

        with pytest.raises(ValidationFailed) as excinfo:
            await services.employees.update_employee_by_eid(
                created["id"], {"salary": 999, "gender": "Robot"}
            )

        assert excinfo.value.errors == [
            "Gender must be Male, Female, or Other",
            "Salary must be at least 1000",
        ]

    @pytest.mark.asyncio
    async def test_email_taken_by_another_record(self, services, employee_input):
        await services.employees.add_employee(employee_input)
        bob = await services.employees.add_employee(_employee(first_name="Bob", email="bob@x.com"))

        with pytest.raises(AlreadyExists):
            await services.employees.update_employee_by_eid(bob["id"], {"email": "ANN@x.com"})

    @pytest.mark.asyncio
    async def test_keeping_own_email(self, services, employee_input):
        created = await services.employees.add_employee(employee_input)

        updated = await services.employees.update_employee_by_eid(
            created["id"], {"email": "Ann@X.com", "designation": " Lead "}
        )

        assert updated["email"] == "ann@x.com"
        assert updated["designation"] == "Lead"

    @pytest.mark.asyncio
    async def test_empty_update_returns_current_record(self, services, employee_input):
        created = await services.employees.add_employee(employee_input)

        assert await services.employees.update_employee_by_eid(created["id"], {}) == created

    @pytest.mark.asyncio
    async def test_clearing_optional_fields(self, services, employee_input):
        created = await services.employees.add_employee({**employee_input, "gender": "Other"})

        updated = await services.employees.update_employee_by_eid(created["id"], {"gender": None})

        assert updated["gender"] is None

    @pytest.mark.asyncio
    async def test_record_deleted_before_write(self):
        gateway = AsyncMock()
        gateway.find_employee_by_id.return_value = {"_id": ObjectId(), "email": "ann@x.com"}
        gateway.update_employee.return_value = None

        with pytest.raises(NotFound):
            await EmployeeService(gateway).update_employee_by_eid(str(ObjectId()), {"salary": 2000})


class TestDeleteEmployee:
    @pytest.mark.asyncio
    async def test_never_created_id(self, services):
        with pytest.raises(NotFound) as excinfo:
            await services.employees.delete_employee_by_eid(str(ObjectId()))

        assert excinfo.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_once_then_not_found(self, services, gateway, employee_input):
        created = await services.employees.add_employee(employee_input)

        deleted = await services.employees.delete_employee_by_eid(created["id"])
        assert deleted == created
        assert gateway.employees == {}

        with pytest.raises(NotFound):
            await services.employees.delete_employee_by_eid(created["id"])

    @pytest.mark.asyncio
    async def test_invalid_id(self, services):
        with pytest.raises(InvalidId):
            await services.employees.delete_employee_by_eid("123")


class TestReadEmployees:
    @pytest.mark.asyncio
    async def test_get_by_eid(self, services, employee_input):
        created = await services.employees.add_employee(employee_input)

        assert await services.employees.get_employee_by_eid(created["id"]) == created
        assert await services.employees.get_employee_by_eid(str(ObjectId())) is None

        with pytest.raises(InvalidId):
            await services.employees.get_employee_by_eid("zzz")

    @pytest.mark.asyncio
    async def test_get_all_newest_first(self, services):
        first = await services.employees.add_employee(_employee(email="a@x.com"))
        second = await services.employees.add_employee(_employee(email="b@x.com"))

        views = await services.employees.get_all_employees()

        assert [v["id"] for v in views] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_search_requires_a_filter(self, services):
        with pytest.raises(BadRequest) as excinfo:
            await services.employees.get_employees_by_designation_or_department()
        assert excinfo.value.kind is ErrorKind.BAD_REQUEST

        with pytest.raises(BadRequest):
            await services.employees.get_employees_by_designation_or_department("  ", "")

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_substring(self, services):
        engineer = await services.employees.add_employee(
            _employee(email="e@x.com", designation="Engineer II")
        )
        await services.employees.add_employee(_employee(email="m@x.com", designation="Manager"))

        views = await services.employees.get_employees_by_designation_or_department(
            designation="ENGINEER"
        )

        assert [v["id"] for v in views] == [engineer["id"]]

    @pytest.mark.asyncio
    async def test_search_matches_either_filter(self, services):
        engineer = await services.employees.add_employee(
            _employee(email="e@x.com", designation="Engineer", department="R&D")
        )
        accountant = await services.employees.add_employee(
            _employee(email="a@x.com", designation="Accountant", department="Finance")
        )
        await services.employees.add_employee(
            _employee(email="s@x.com", designation="Sales Rep", department="Sales")
        )

        views = await services.employees.get_employees_by_designation_or_department(
            designation="engineer", department="finance"
        )

        assert {v["id"] for v in views} == {engineer["id"], accountant["id"]}

    @pytest.mark.asyncio
    async def test_search_passes_patterns_to_gateway(self):
        gateway = AsyncMock()
        gateway.list_employees.return_value = []

        await EmployeeService(gateway).get_employees_by_designation_or_department(
            department=" Eng "
        )

        gateway.list_employees.assert_awaited_once_with(
            designation_pattern=None, department_pattern="Eng"
        )
