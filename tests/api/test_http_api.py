from datetime import date, datetime, timedelta

import pytest

from workforce_payroll.main import create_app

JAN_1 = date(2025, 1, 1)


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def worked_january(attendance):
    for employee_id in (1, 3):
        for i in range(5):
            attendance.add_day(employee_id, JAN_1 + timedelta(days=i), main="8")


def test_generate_salaries(client, worked_january):
    res = client.post("/api/salaries/generate", json={"year": 2025, "month": 1})

    assert res.status_code == 201
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["created"] == 2
    assert body["data"]["periodEnd"] == "2025-01-31"
    assert [e["employee_id"] for e in body["data"]["errors"]] == [2]
    assert body["data"]["salaries"][0]["total_salary"] == "800000.00"


@pytest.mark.parametrize(
    "payload",
    [{"year": 2025}, {"year": 2025, "month": 13}, {"year": "x", "month": 1}, {"year": 2025, "month": 1, "departmentId": "a"}],
)
def test_generate_salaries_validation(client, payload):
    res = client.post("/api/salaries/generate", json=payload)

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_get_unknown_salary(client):
    res = client.get("/api/salaries/404")

    assert res.status_code == 404


def test_list_and_pay(client, salaries, worked_january):
    client.post("/api/salaries/generate", json={"year": 2025, "month": 1})
    ids = sorted(salaries.by_id)

    listed = client.get("/api/salaries?paymentStatus=unpaid&startDate=2025-01-01&endDate=2025-01-31")
    first = client.post("/api/salaries/process-payments", json={"salaryIds": ids, "paymentDate": "2025-02-05"})
    second = client.post("/api/salaries/process-payments", json={"salaryIds": ids})

    assert len(listed.get_json()["data"]) == 2
    assert first.get_json()["data"] == {"updatedCount": 2, "paymentDate": "2025-02-05"}
    assert second.get_json()["data"]["updatedCount"] == 0


def test_list_with_bad_filter(client):
    res = client.get("/api/salaries?contractType=intern")

    assert res.status_code == 400
    assert res.get_json()["field"] == "contractType"


def test_statistics(client, worked_january):
    client.post("/api/salaries/generate", json={"year": 2025, "month": 1})

    res = client.get("/api/salaries?stats=true&startDate=2025-01-01&endDate=2025-01-31")

    data = res.get_json()["data"]
    assert data["total_employees"] == 2
    assert set(data["department_breakdown"]) == {"Production", "Warehouse"}


def test_payment_status_update(client, salaries, worked_january):
    client.post("/api/salaries/generate", json={"year": 2025, "month": 1})
    salary_id = sorted(salaries.by_id)[0]

    paid = client.put(f"/api/salaries/{salary_id}/payment-status", json={"paymentStatus": "PAID", "paymentDate": "2025-02-01"})
    unpaid = client.put(f"/api/salaries/{salary_id}/payment-status", json={"paymentStatus": "UNPAID"})

    assert paid.get_json()["data"]["payment_date"] == "2025-02-01"
    assert unpaid.get_json()["data"]["payment_date"] is None


def test_export_csv(client, worked_january):
    client.post("/api/salaries/generate", json={"year": 2025, "month": 1})

    res = client.get("/api/salaries?export=csv")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    text = res.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("Employee Code,Employee Name,Department")
    assert len(text.splitlines()) == 3


def test_export_excel(client, worked_january):
    client.post("/api/salaries/generate", json={"year": 2025, "month": 1})

    res = client.get("/api/salaries?export=excel")

    assert res.status_code == 200
    assert res.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert res.data[:2] == b"PK"


def test_unknown_export_format(client):
    assert client.get("/api/salaries?export=pdf").status_code == 400


def test_salary_rate_crud(client):
    created = client.post(
        "/api/salary-rates",
        json={
            "departmentId": 10,
            "contractType": "TRAINING",
            "mainWorkHourRate": "15000",
            "regularOvertimeRate": "22500",
            "weeklyOvertimeRate": "30000",
        },
    )
    rate_id = created.get_json()["data"]["rate_id"]
    duplicate = client.post(
        "/api/salary-rates",
        json={
            "departmentId": 10,
            "contractType": "TRAINING",
            "mainWorkHourRate": "1",
            "regularOvertimeRate": "1",
            "weeklyOvertimeRate": "1",
        },
    )
    updated = client.put(f"/api/salary-rates/{rate_id}", json={"mainWorkHourRate": "16000"})
    deleted = client.delete(f"/api/salary-rates/{rate_id}")
    listed = client.get("/api/salary-rates?departmentId=10")

    assert created.status_code == 201
    assert duplicate.status_code == 409
    assert updated.get_json()["data"]["main_work_hour_rate"] == "16000"
    assert deleted.status_code == 200
    assert [r["contract_type"] for r in listed.get_json()["data"]] == ["PERMANENT"]


def test_salary_rate_missing_field(client):
    res = client.post("/api/salary-rates", json={"departmentId": 10, "contractType": "TRAINING"})

    assert res.status_code == 400


def test_check_in_and_out(client, monkeypatch):
    times = iter([datetime(2025, 1, 6, 8, 0), datetime(2025, 1, 6, 17, 0)])
    monkeypatch.setattr("workforce_payroll.attendance.service.now_local", lambda: next(times))

    check_in = client.post("/api/attendance/check-in", json={"employeeId": 1})
    check_out = client.post("/api/attendance/check-out", json={"employeeId": 1})

    assert check_in.status_code == 201
    assert check_out.status_code == 200
    data = check_out.get_json()["data"]
    assert data["status"] == "PRESENT"
    assert data["main_work_hours"] == "7.00"
    assert data["regular_overtime_hours"] == "1.00"


def test_double_check_in_is_a_conflict(client, monkeypatch):
    monkeypatch.setattr("workforce_payroll.attendance.service.now_local", lambda: datetime(2025, 1, 6, 8, 0))

    client.post("/api/attendance/check-in", json={"employeeId": 1})
    res = client.post("/api/attendance/check-in", json={"employeeId": 1})

    assert res.status_code == 409


def test_check_in_unknown_employee(client):
    res = client.post("/api/attendance/check-in", json={"employeeId": 404})

    assert res.status_code == 404


def test_check_in_requires_employee(client):
    assert client.post("/api/attendance/check-in", json={}).status_code == 400


def test_attendance_correction(client, attendance):
    record = attendance.add_day(1, date(2025, 1, 6))

    res = client.put(
        f"/api/attendance/{record.attendance_id}",
        json={"checkInTime": "2025-01-06T08:00:00", "checkOutTime": "2025-01-06T18:00:00"},
    )
    bad = client.put(
        f"/api/attendance/{record.attendance_id}",
        json={"checkInTime": "2025-01-06T18:00:00", "checkOutTime": "2025-01-06T08:00:00"},
    )

    assert res.get_json()["data"]["regular_overtime_hours"] == "2.00"
    assert bad.status_code == 400


def test_attendance_history(client, attendance):
    attendance.add_day(1, date(2025, 1, 6))

    res = client.get("/api/attendance?employeeId=1")

    assert len(res.get_json()["data"]) == 1


def test_shift_create_and_update(client):
    created = client.post(
        "/api/shifts",
        json={
            "shiftName": "Evening",
            "shiftType": "shift_a",
            "mainWorkStart": "14:00",
            "mainWorkEnd": "22:00",
            "regularOvertimeStart": "22:00",
            "regularOvertimeEnd": "23:30",
        },
    )
    shift_id = created.get_json()["data"]["shift_id"]
    overlapping = client.put(
        f"/api/shifts/{shift_id}",
        json={
            "shiftName": "Evening",
            "mainWorkStart": "14:00",
            "mainWorkEnd": "22:00",
            "regularOvertimeStart": "21:00",
            "regularOvertimeEnd": "23:30",
        },
    )

    assert created.status_code == 201
    assert created.get_json()["data"]["main_work_end"] == "22:00:00"
    assert overlapping.status_code == 400
    assert overlapping.get_json()["field"] == "regular_overtime"
    assert len(client.get("/api/shifts").get_json()["data"]) == 2


def test_shift_bad_time(client):
    res = client.post("/api/shifts", json={"shiftName": "X", "mainWorkStart": "8am", "mainWorkEnd": "17:00"})

    assert res.status_code == 400


def test_unexpected_error_is_500(client, container, monkeypatch):
    def boom(salary_id):
        raise RuntimeError("database down")

    monkeypatch.setattr(container.payroll_report_service, "get_salary", boom)

    res = client.get("/api/salaries/1")

    assert res.status_code == 500
    assert res.get_json() == {"success": False, "message": "Internal server error"}
