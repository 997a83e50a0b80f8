from factories import API

PARTS = f"{API}/spare_parts"


def add_part(client, **overrides):
    payload = {"name": "Oxygen Sensor", "quantity": 10, "min_quantity": 3, "price": 45.0, "compatibility": ["Ventilator V60"]}
    payload.update(overrides)
    response = client.post(f"{PARTS}/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_stock_adjustment(client):
    part = add_part(client)

    response = client.patch(f"{PARTS}/{part['id']}/stock", json={"quantity_change": -4, "reason": "PM visit"})

    assert response.status_code == 200
    assert response.json()["quantity"] == 6


def test_stock_cannot_go_negative(client):
    part = add_part(client, quantity=2)

    response = client.patch(f"{PARTS}/{part['id']}/stock", json={"quantity_change": -3})

    assert response.status_code == 422
    assert client.get(f"{PARTS}/{part['id']}").json()["quantity"] == 2


def test_low_stock_alerts(client):
    add_part(client, name="Filter", quantity=3, min_quantity=3)
    add_part(client, name="Fuse", quantity=0)
    add_part(client, name="Belt", quantity=50)

    alerts = client.get(f"{PARTS}/alerts/low-stock").json()

    assert [a["spare_part"]["name"] for a in alerts] == ["Fuse", "Filter"]
    assert alerts[0]["out_of_stock"] is True


def test_compatible_parts(client):
    add_part(client)
    add_part(client, name="Transducer", compatibility=["Ultrasound"])

    parts = client.get(f"{PARTS}/compatible/search", params={"equipment_name": "ventilator"}).json()

    assert [p["name"] for p in parts] == ["Oxygen Sensor"]


def test_update_and_delete(client):
    part = add_part(client)

    assert client.put(f"{PARTS}/{part['id']}", json={"price": 50}).json()["price"] == 50
    assert client.delete(f"{PARTS}/{part['id']}").status_code == 200
    assert client.get(f"{PARTS}/{part['id']}").status_code == 404


def test_vendor_directory(client):
    response = client.post(f"{API}/vendors/", json={
        "company_name": "Medline",
        "rating": 4.5,
        "machines": [{"name": "Ventilator", "brand": "Philips", "origin": "NL"}],
    })
    assert response.status_code == 201
    vendor = response.json()
    assert vendor["machines"][0]["brand"] == "Philips"

    updated = client.put(f"{API}/vendors/{vendor['id']}", json={"rating": 3}).json()
    assert updated["rating"] == 3
    assert client.post(f"{API}/vendors/", json={"company_name": "Bad", "rating": 6}).status_code == 422
    assert [v["company_name"] for v in client.get(f"{API}/vendors/", params={"search": "med"}).json()] == ["Medline"]
    assert client.delete(f"{API}/vendors/{vendor['id']}").status_code == 200


def test_engineer_directory(client):
    engineer = client.post(f"{API}/engineers/", json={"name": "Rahim", "company_id": "v1", "phone": "017"}).json()
    client.post(f"{API}/engineers/", json={"name": "Karim", "company_id": "v2"})

    assert [e["name"] for e in client.get(f"{API}/engineers/", params={"company_id": "v1"}).json()] == ["Rahim"]
    assert client.put(f"{API}/engineers/{engineer['id']}", json={"specialties": "Imaging"}).json()["specialties"] == "Imaging"
    assert client.delete(f"{API}/engineers/{engineer['id']}").status_code == 200
    assert client.get(f"{API}/engineers/{engineer['id']}").status_code == 404


def test_documents(client):
    document = client.post(f"{API}/documents/", json={
        "name": "Service manual",
        "category": "Manual",
        "equipment_id": "eq-1",
        "url": "https://files.example.com/manual.pdf",
    }).json()

    assert document["upload_date"] is not None
    assert len(client.get(f"{API}/documents/", params={"equipment_id": "eq-1"}).json()) == 1
    assert client.get(f"{API}/documents/", params={"category": "Bill"}).json() == []
    assert client.delete(f"{API}/documents/{document['id']}").status_code == 200
