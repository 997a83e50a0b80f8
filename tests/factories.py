from datetime import date, datetime
from types import SimpleNamespace


def make_equipment(**overrides):
    data = dict(
        id="eq-1",
        name="Ventilator",
        group_name=None,
        serial_number=None,
        model=None,
        manufacturer=None,
        location=None,
        purchase_date=None,
        installation_date=None,
        expected_lifecycle=None,
        quantity=1,
        purchase_price=0.0,
        paid_amount=0.0,
        remaining_amount=0.0,
        payment_history=[],
        has_warranty=False,
        warranty_expiry_date=None,
        supplier_name=None,
        status="Operational",
        license_required=False,
        license_info=None,
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def make_contract(**overrides):
    data = dict(id="c-1", equipment_id="eq-1", type="AMC", company_name=None, amount=0.0, end_date=date(2030, 1, 1))
    data.update(overrides)
    return SimpleNamespace(**data)


def make_log(**overrides):
    data = dict(
        id="log-1",
        equipment_id="eq-1",
        equipment_name="Ventilator",
        date=date(2024, 6, 1),
        type="Preventive",
        parts_replaced=[],
        cost=0.0,
        paid_amount=0.0,
        remaining_amount=0.0,
        payment_history=[],
        company_name=None,
        technician_name=None,
    )
    data.update(overrides)
    return SimpleNamespace(**data)


def make_reminder(**overrides):
    data = dict(id="r-1", source_id="eq-1", scheduled_date=date(2024, 6, 10), lead_days=3, status="Pending")
    data.update(overrides)
    return SimpleNamespace(**data)


NOW = datetime(2024, 6, 7, 15, 30)


API = "/api/v1"


def create_equipment(client, **overrides):
    payload = {
        "name": "Ventilator",
        "serial_number": "VT-100",
        "purchase_price": 100000,
        "paid_amount": 40000,
        "supplier_name": "Medline",
    }
    payload.update(overrides)
    response = client.post(f"{API}/equipment/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
