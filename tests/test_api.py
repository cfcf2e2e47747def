from __future__ import annotations

from datetime import date, datetime, timedelta

from src.clinic_workforce.clinic_workforce.core.enums import AttendanceStatus, ClockMethod


def _create_block(client, clinic_id=1, **overrides):
    payload = {
        "date": "2025-03-03",
        "startTime": "08:00:00",
        "endTime": "16:00:00",
        "roleNeeded": "Nurse",
        "qtyNeeded": 2,
        "locationId": 10,
    }
    payload.update(overrides)
    return client.post(f"/api/clinics/{clinic_id}/schedule-blocks", json=payload)


def test_directory_lists_staff_per_clinic(client):
    res = client.get("/api/clinics/1/staff?location=ALL")

    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert [s["staffId"] for s in body["data"]] == [1, 2, 3]
    assert body["data"][0]["fullName"] == "Amina Odhiambo"


def test_create_staff_endpoint(client):
    res = client.post("/api/clinics/2/staff", json={"firstName": "Faith", "jobRole": "Nurse", "locationId": 20})

    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["clinicId"] == 2
    assert data["dutyStatus"] == "off"


def test_directory_rejects_bad_location_filter(client):
    res = client.get("/api/clinics/1/staff?location=main")

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_create_and_fetch_block(client):
    res = _create_block(client)

    assert res.status_code == 201
    block = res.get_json()["data"]
    assert block["startTime"] == "08:00:00"
    assert block["openSlots"] == 2
    assert block["assignedStaffIds"] == []

    fetched = client.get(f"/api/clinics/1/schedule-blocks/{block['blockId']}")
    assert fetched.get_json()["data"]["workDate"] == "2025-03-03"


def test_create_block_takes_date_key(client):
    res = client.post(
        "/api/clinics/2/schedule-blocks",
        json={"date": "2025-03-04", "startTime": "08:00", "endTime": "12:00", "roleNeeded": "Nurse"},
    )

    assert res.status_code == 201
    assert res.get_json()["data"]["workDate"] == "2025-03-04"

    block_id = res.get_json()["data"]["blockId"]
    res = client.put(f"/api/clinics/2/schedule-blocks/{block_id}", json={"date": "2025-03-05"})
    assert res.get_json()["data"]["workDate"] == "2025-03-05"


def test_create_block_in_unknown_clinic_is_404(client):
    res = client.post(
        "/api/clinics/999/schedule-blocks",
        json={"date": "2025-03-04", "startTime": "08:00", "endTime": "12:00", "roleNeeded": "Nurse"},
    )

    assert res.status_code == 404
    assert res.get_json() == {"success": False, "error": "Clinic not found"}


def test_block_of_other_clinic_is_404(client):
    block_id = _create_block(client).get_json()["data"]["blockId"]

    res = client.get(f"/api/clinics/2/schedule-blocks/{block_id}")

    assert res.status_code == 404
    assert res.get_json() == {"success": False, "error": "Schedule block not found"}


def test_unknown_body_field_is_400(client):
    res = _create_block(client, clinicId=2)

    assert res.status_code == 400
    assert "clinicId" in res.get_json()["error"]


def test_assign_and_delete_filled_block(client):
    block_id = _create_block(client).get_json()["data"]["blockId"]

    res = client.put(f"/api/clinics/1/schedule-blocks/{block_id}/assign", json={"staffId": 1, "action": "add"})
    assert res.get_json()["data"]["assignedStaffIds"] == [1]

    res = client.delete(f"/api/clinics/1/schedule-blocks/{block_id}")
    assert res.status_code == 409


def test_locum_cover_requires_payload_for_action(client):
    block_id = _create_block(client).get_json()["data"]["blockId"]

    res = client.put(f"/api/clinics/1/schedule-blocks/{block_id}/locum", json={"action": "remove"})
    assert res.status_code == 400

    res = client.put(
        f"/api/clinics/1/schedule-blocks/{block_id}/locum",
        json={"action": "add", "locum": {"name": "Dr. Njeri", "phone": "0711000000"}},
    )
    covers = res.get_json()["data"]["externalCovers"]
    assert covers[0]["name"] == "Dr. Njeri"
    assert covers[0]["coverId"].startswith("lc_")


def test_block_list_filters_by_location(client):
    _create_block(client)
    _create_block(client, locationId=11, roleNeeded="Receptionist")

    res = client.get("/api/clinics/1/schedule-blocks?location=11&start=2025-03-01&end=2025-03-31")

    assert [b["roleNeeded"] for b in res.get_json()["data"]] == ["Receptionist"]


def test_clock_in_twice_is_409(client):
    first = client.post("/api/clinics/1/attendance/clock-in", json={"staffId": 2})
    assert first.status_code == 201
    assert first.get_json()["message"] == "Clocked in successfully"

    second = client.post("/api/clinics/1/attendance/clock-in", json={"staffId": 2})
    assert second.status_code == 409
    assert second.get_json()["error"] == "Already clocked in today"


def test_clock_out_without_clock_in_is_409(client):
    res = client.post("/api/clinics/1/attendance/clock-out", json={"staffId": 3})

    assert res.status_code == 409


def test_clock_out_closes_record(client):
    client.post("/api/clinics/1/attendance/clock-in", json={"staffId": 2, "method": "qr_code"})

    res = client.post("/api/clinics/1/attendance/clock-out", json={"staffId": 2})

    data = res.get_json()["data"]
    assert res.status_code == 200
    assert data["clockOut"] is not None
    assert data["status"] == "absent"
    assert data["clockInMethod"] == "qr_code"

    listed = client.get(f"/api/clinics/1/attendance?date={date.today().isoformat()}&staffId=2")
    assert len(listed.get_json()["data"]) == 1
    assert listed.get_json()["data"][0]["staffName"] == "Brian Kiptoo"
    assert listed.get_json()["data"][0]["jobRole"] == "Clinical Officer"


def test_attendance_list_is_not_truncated(client, container):
    start = date(2025, 1, 1)
    for staff_id in (1, 2):
        for offset in range(260):
            day = start + timedelta(days=offset)
            container.attendance_repo.create_clock_in(
                clinic_id=1,
                staff_id=staff_id,
                work_date=day,
                clock_in=datetime.combine(day, datetime.min.time()).replace(hour=8),
                method=ClockMethod.MANUAL,
                status=AttendanceStatus.PRESENT,
            )

    res = client.get("/api/clinics/1/attendance?from=2025-01-01&to=2025-12-31")

    assert len(res.get_json()["data"]) == 520


def test_attendance_summary_requires_dates(client):
    res = client.get("/api/clinics/1/attendance/summary?from=2025-03-01")

    assert res.status_code == 400


def test_attendance_summary_echoes_period(client):
    res = client.get("/api/clinics/1/attendance/summary?from=2025-03-01&to=2025-03-31")

    body = res.get_json()
    assert body["data"] == []
    assert body["period"] == {"from": "2025-03-01", "to": "2025-03-31"}


def test_attendance_export_is_csv_attachment(client):
    client.post("/api/clinics/1/attendance/clock-in", json={"staffId": 1})

    res = client.get("/api/clinics/1/attendance/export")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "attendance_export.csv" in res.headers["Content-Disposition"]
    lines = res.get_data(as_text=True).splitlines()
    assert lines[0] == "Name,Job Role,Date,Clock In,Clock Out,Hours Worked,Status"
    assert lines[1].startswith('"Amina Odhiambo","Nurse"')


def test_leave_flow(client):
    res = client.post(
        "/api/clinics/1/leave",
        json={"staffId": 1, "leaveType": "annual", "fromDate": "2024-01-06", "toDate": "2024-01-07"},
    )
    assert res.status_code == 201
    body = res.get_json()
    assert body["message"] == "Leave request for 2 day(s) submitted"
    leave_id = body["data"]["leaveId"]

    res = client.patch(f"/api/clinics/1/leave/{leave_id}", json={"status": "approved", "reviewerId": 2})
    assert res.get_json()["data"]["status"] == "approved"
    assert res.get_json()["data"]["reviewedBy"] == 2

    res = client.patch(f"/api/clinics/1/leave/{leave_id}", json={"status": "cancelled"})
    assert res.status_code == 409

    res = client.delete(f"/api/clinics/1/leave/{leave_id}")
    assert res.status_code == 409


def test_leave_list_filter_by_type_alias(client):
    client.post(
        "/api/clinics/1/leave",
        json={"staffId": 1, "leaveType": "sick", "fromDate": "2024-01-01", "toDate": "2024-01-01"},
    )

    assert len(client.get("/api/clinics/1/leave?type=sick").get_json()["data"]) == 1
    assert client.get("/api/clinics/1/leave?type=annual").get_json()["data"] == []


def test_leave_conflicts_endpoint(client):
    block_id = _create_block(client, date="2024-01-06").get_json()["data"]["blockId"]
    client.put(f"/api/clinics/1/schedule-blocks/{block_id}/assign", json={"staffId": 1})
    leave_id = client.post(
        "/api/clinics/1/leave",
        json={"staffId": 1, "leaveType": "annual", "fromDate": "2024-01-06", "toDate": "2024-01-07"},
    ).get_json()["data"]["leaveId"]

    res = client.get(f"/api/clinics/1/leave/{leave_id}/conflicts")

    assert [b["blockId"] for b in res.get_json()["data"]] == [block_id]


def test_payroll_upsert_and_bulk_status(client):
    res = client.post(
        "/api/clinics/1/payroll",
        json={"payrollKey": "m_1_2025_03", "payType": "MONTHLY", "staffId": 1, "units": "1", "rate": 85000},
    )
    assert res.status_code == 200
    entry = res.get_json()["data"]
    assert entry["status"] == "draft"
    assert entry["amount"] == 85000
    assert entry["units"] == 1.0

    res = client.put(
        "/api/clinics/1/payroll/bulk-status",
        json={"payrollKeys": ["m_1_2025_03", "missing"], "status": "approved"},
    )
    body = res.get_json()
    assert body["updated"] == 1
    assert body["data"]["missingKeys"] == ["missing"]
    assert body["data"]["refusedKeys"] == []

    res = client.put(
        "/api/clinics/1/payroll/bulk-status",
        json={"payrollKeys": ["m_1_2025_03"], "status": "submitted"},
    )
    assert res.get_json()["updated"] == 0
    assert res.get_json()["data"]["refusedKeys"] == ["m_1_2025_03"]

    res = client.put("/api/clinics/1/payroll/m_1_2025_03/status", json={"status": "draft"})
    assert res.status_code == 409


def test_payroll_bulk_status_requires_keys(client):
    res = client.put("/api/clinics/1/payroll/bulk-status", json={"payrollKeys": [], "status": "paid"})

    assert res.status_code == 400


def test_payroll_preview_requires_range(client):
    assert client.get("/api/clinics/1/payroll/preview").status_code == 400
    assert client.get("/api/clinics/1/payroll/preview?from=2025-03-01&to=2025-03-31").get_json()["data"] == []


def test_unknown_route_is_json_404(client):
    res = client.get("/api/nowhere")

    assert res.status_code == 404
    assert res.get_json()["success"] is False


def test_payroll_upsert_cannot_change_status_of_existing_entry(client):
    payload = {"payrollKey": "m_1_2025_04", "payType": "MONTHLY", "staffId": 1, "units": 1, "rate": 85000}
    client.post("/api/clinics/1/payroll", json=payload)
    client.put("/api/clinics/1/payroll/m_1_2025_04/status", json={"status": "approved"})

    res = client.post("/api/clinics/1/payroll", json={**payload, "status": "draft"})

    assert res.status_code == 409
    listed = client.get("/api/clinics/1/payroll").get_json()["data"]
    assert [e["status"] for e in listed if e["payrollKey"] == "m_1_2025_04"] == ["approved"]
