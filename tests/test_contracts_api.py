from datetime import timedelta

from core.dates import utcnow
from factories import API, create_equipment

CONTRACTS = f"{API}/contracts"


def future(days):
    return (utcnow().date() + timedelta(days=days)).isoformat()


def test_create_contract_without_existing_cover(client):
    equipment = create_equipment(client)

    response = client.post(f"{CONTRACTS}/", json={
        "equipment_id": equipment["id"],
        "company_name": "Medserve",
        "type": "AMC",
        "start_date": future(-10),
        "end_date": future(355),
        "amount": 12000,
    })

    assert response.status_code == 201
    body = response.json()
    assert body["warning"] is None
    assert body["contract"]["equipment_name"] == "Ventilator"
    assert body["contract"]["status"] == "Active"


def test_contract_on_warranty_covered_asset_warns(client):
    equipment = create_equipment(client, has_warranty=True, warranty_expiry_date=future(100))

    body = client.post(f"{CONTRACTS}/", json={
        "equipment_id": equipment["id"],
        "end_date": future(400),
    }).json()

    assert "under Warranty" in body["warning"]
    assert body["contract"]["id"]


def test_second_contract_warns(client):
    equipment = create_equipment(client)
    client.post(f"{CONTRACTS}/", json={"equipment_id": equipment["id"], "end_date": future(200)})

    body = client.post(f"{CONTRACTS}/", json={"equipment_id": equipment["id"], "end_date": future(500)}).json()

    assert "active Maintenance Contract" in body["warning"]


def test_editing_a_contract_does_not_conflict_with_itself(client):
    equipment = create_equipment(client)
    created = client.post(f"{CONTRACTS}/", json={"equipment_id": equipment["id"], "end_date": future(200)}).json()

    body = client.put(f"{CONTRACTS}/{created['contract']['id']}", json={"end_date": future(300), "type": "CMC"}).json()

    assert body["warning"] is None
    assert body["contract"]["type"] == "CMC"


def test_expired_contract_status_and_label(client):
    equipment = create_equipment(client)
    created = client.post(f"{CONTRACTS}/", json={"equipment_id": equipment["id"], "end_date": future(-1)}).json()

    assert created["contract"]["status"] == "Expired"
    detail = client.get(f"{CONTRACTS}/{created['contract']['id']}").json()
    assert detail["expiry_status"] == "Expired"


def test_expiring_soon_label(client):
    equipment = create_equipment(client)
    created = client.post(f"{CONTRACTS}/", json={"equipment_id": equipment["id"], "end_date": future(10)}).json()

    detail = client.get(f"{CONTRACTS}/{created['contract']['id']}").json()

    assert detail["expiry_status"] == "Expiring Soon"


def test_start_after_end_rejected(client):
    equipment = create_equipment(client)

    response = client.post(f"{CONTRACTS}/", json={
        "equipment_id": equipment["id"],
        "start_date": future(10),
        "end_date": future(5),
    })

    assert response.status_code == 422


def test_list_and_delete(client):
    equipment = create_equipment(client)
    created = client.post(f"{CONTRACTS}/", json={"equipment_id": equipment["id"], "end_date": future(30)}).json()

    assert len(client.get(f"{CONTRACTS}/", params={"equipment_id": equipment["id"]}).json()) == 1
    assert client.delete(f"{CONTRACTS}/{created['contract']['id']}").status_code == 200
    assert client.get(f"{CONTRACTS}/{created['contract']['id']}").status_code == 404
