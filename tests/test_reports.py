from datetime import date, datetime
from types import SimpleNamespace

from core.reports import (
    COVERED,
    EXPOSED,
    STANDALONE_GROUP,
    asset_dossier,
    breakdown_frequency,
    cost_analysis,
    financial_history,
    fleet_overview,
    group_assets,
    monthly_maintenance,
    reliability_index,
    spare_parts_usage,
    warranty_audit,
)
from factories import NOW, make_contract, make_equipment, make_log, make_reminder


def part(name, quantity=0, price=0.0, min_quantity=5):
    return SimpleNamespace(name=name, quantity=quantity, price=price, min_quantity=min_quantity)


def fleet():
    return [
        make_equipment(id="e1", name="MRI", group_name="Radiology", quantity=1, purchase_price=500000, paid_amount=300000, remaining_amount=200000),
        make_equipment(id="e2", name="Infusion Pump", group_name="  ", quantity=4, purchase_price=1000, paid_amount=4000, remaining_amount=0),
        make_equipment(id="e3", name="CT", group_name="Radiology", quantity=1, purchase_price=300000),
    ]


def test_group_assets():
    groups = group_assets(fleet())

    assert [(g.name, g.equipment_ids) for g in groups] == [
        ("Radiology", ["e1", "e3"]),
        (STANDALONE_GROUP, ["e2"]),
    ]


def test_financial_history_multiplies_by_quantity():
    report = financial_history(fleet(), ["e2"])

    assert len(report.rows) == 1
    assert report.rows[0].total_spent == 4000
    assert report.total_due == 0


def test_financial_history_defaults_to_whole_fleet():
    report = financial_history(fleet())

    assert report.total_spent == 500000 + 4000 + 300000
    assert report.total_paid == 304000


def test_empty_selection_selects_nothing():
    assert financial_history(fleet(), []).rows == []


def test_cost_analysis_sorted_by_grand_total():
    logs = [
        make_log(id="l1", equipment_id="e3", cost=250000),
        make_log(id="l2", equipment_id="e3", cost=10000),
        make_log(id="l3", equipment_id="missing", cost=99),
    ]

    rows = cost_analysis(fleet(), logs)

    assert [r.equipment_id for r in rows] == ["e3", "e1", "e2"]
    assert rows[0].service_total == 260000
    assert rows[0].service_count == 2
    assert rows[0].grand_total == 560000


def test_reliability_labels():
    assert reliability_index(4, 2) == (2.0, "Stable")
    assert reliability_index(1, 1) == (1.0, "Needs PM")
    assert reliability_index(0, 3) == (0.0, "Unreliable")
    assert reliability_index(1, 0) == (1.0, "Stable")
    assert reliability_index(0, 0) == (0.0, "Unreliable")


def test_breakdowns_without_preventive_care_are_unreliable():
    logs = [make_log(id=f"c{i}", equipment_id="e1", type="Corrective") for i in range(3)]

    rows = breakdown_frequency(fleet(), logs, ["e1"])

    assert rows[0].breakdown_count == 3
    assert rows[0].ratio == 0
    assert rows[0].reliability == "Unreliable"


def test_preventive_only_asset_is_stable():
    logs = [make_log(id="p1", equipment_id="e2", type="Preventive")]

    row = breakdown_frequency(fleet(), logs, ["e2"])[0]

    assert row.breakdown_count == 0
    assert row.reliability == "Stable"


def test_spare_parts_usage_joins_stock_by_exact_name():
    logs = [
        make_log(id="l1", equipment_id="e1", parts_replaced=["Filter", "Fuse"]),
        make_log(id="l2", equipment_id="e1", parts_replaced=["Filter"]),
        make_log(id="l3", equipment_id="e2", parts_replaced=["Filter", "fuse"]),
    ]
    parts = [part("Filter", quantity=7, price=12.5), part("Fuse", quantity=2, price=1.0)]

    rows = spare_parts_usage(logs, parts)

    assert rows[0].name == "Filter"
    assert rows[0].count == 3
    assert rows[0].machine_count == 2
    assert rows[0].stock == 7
    unmatched = next(r for r in rows if r.name == "fuse")
    assert unmatched.stock == 0
    assert unmatched.price == 0


def test_warranty_audit_classifies_coverage():
    equipment = fleet()
    equipment[0].has_warranty = True
    equipment[0].warranty_expiry_date = date(2025, 1, 1)
    contracts = [make_contract(equipment_id="e3", end_date=date(2024, 12, 1))]

    rows = {r.equipment_id: r for r in warranty_audit(equipment, contracts, NOW)}

    assert rows["e1"].classification == COVERED
    assert rows["e2"].classification == EXPOSED
    assert rows["e3"].coverage.kind == "contract"


def test_monthly_maintenance_window():
    logs = [
        make_log(id="before", date=date(2024, 5, 31)),
        make_log(id="first", date=date(2024, 6, 1)),
        make_log(id="today", date=date(2024, 6, 7), equipment_name=None),
        make_log(id="future", date=date(2024, 6, 8)),
    ]

    rows = monthly_maintenance(logs, NOW)

    assert [r.id for r in rows] == ["first", "today"]
    assert rows[1].equipment_name == "Unknown"


def test_reports_are_deterministic():
    logs = [
        make_log(id="l1", equipment_id="e1", type="Corrective", cost=50, parts_replaced=["Valve"]),
        make_log(id="l2", equipment_id="e3", type="Preventive", cost=50, parts_replaced=["Valve", "Belt"]),
    ]
    parts = [part("Valve", 3, 10.0)]
    contracts = [make_contract(equipment_id="e3")]

    builders = [
        lambda: financial_history(fleet()),
        lambda: cost_analysis(fleet(), logs),
        lambda: breakdown_frequency(fleet(), logs),
        lambda: spare_parts_usage(logs, parts),
        lambda: warranty_audit(fleet(), contracts, NOW),
        lambda: monthly_maintenance(logs, NOW),
    ]
    for build in builders:
        first, second = build(), build()
        if isinstance(first, list):
            assert [r.model_dump_json() for r in first] == [r.model_dump_json() for r in second]
        else:
            assert first.model_dump_json() == second.model_dump_json()


def test_fleet_overview():
    equipment = fleet()
    equipment[1].status = "Down"
    equipment[2].status = "Under Maintenance"
    logs = [make_log(equipment_id="e1", remaining_amount=100)]
    reminders = [
        make_reminder(id="r1", scheduled_date=date(2024, 6, 8)),
        make_reminder(id="r2", scheduled_date=date(2024, 12, 1)),
        make_reminder(id="r3", scheduled_date=date(2024, 6, 8), status="Paid"),
    ]
    parts = [part("Filter", quantity=5, min_quantity=5), part("Belt", quantity=9)]
    contracts = [make_contract(equipment_id="e3")]

    overview = fleet_overview(equipment, logs, contracts, reminders, parts, datetime(2024, 6, 7))

    assert overview.total_units == 6
    assert overview.running == 1
    assert overview.stopped == 4
    assert overview.needs_service == 1
    assert overview.liability.total_outstanding == 200100
    assert overview.scheduled_count == 2
    assert overview.alert_count == 1
    assert overview.contract_count == 1
    assert overview.uncovered_count == 2
    assert overview.low_stock_count == 1


def payment(id, amount, paid_on, method="Cash"):
    return {"id": id, "amount": amount, "date": paid_on, "method": method, "note": ""}


def test_asset_dossier():
    equipment = [
        make_equipment(
            id="e1", name="MRI", quantity=2, purchase_price=1000, paid_amount=1500, remaining_amount=500,
            serial_number="SN-1", payment_history=[payment("p1", 1500, "2024-01-10")],
        ),
        make_equipment(id="e2", name="CT"),
    ]
    logs = [
        make_log(id="l1", equipment_id="e1", date=date(2024, 3, 1), cost=200, paid_amount=150, remaining_amount=50,
                 payment_history=[payment("p2", 150, "2024-03-02", "Bank Transfer")]),
        make_log(id="l2", equipment_id="e1", date=date(2024, 5, 1), cost=300, paid_amount=300, remaining_amount=0,
                 payment_history=[payment("p3", 300, "2024-05-01")]),
        make_log(id="l3", equipment_id="e2", cost=999, remaining_amount=999),
    ]
    contracts = [
        make_contract(id="old", equipment_id="e1", end_date=date(2024, 1, 1)),
        make_contract(id="cmc", equipment_id="e1", type="CMC", company_name="Medserve", amount=5000, end_date=date(2025, 1, 1)),
    ]

    dossier = asset_dossier(equipment, logs, contracts, NOW, ["e1"])

    assert len(dossier) == 1
    mri = dossier[0]
    assert mri.serial_number == "SN-1"
    assert mri.group_name == STANDALONE_GROUP
    assert mri.active_contract.id == "cmc"
    assert mri.active_contract.company_name == "Medserve"
    assert [l.id for l in mri.service_logs] == ["l2", "l1"]
    assert mri.acquisition_total == 2000
    assert mri.service_total == 500
    assert mri.total_due == 550
    assert [(p.id, p.category, p.source_id) for p in mri.payment_timeline] == [
        ("p3", "Service", "l2"),
        ("p2", "Service", "l1"),
        ("p1", "Acquisition", "e1"),
    ]
    assert mri.payment_timeline[1].method == "Bank Transfer"


def test_asset_dossier_without_contract_or_history():
    dossier = asset_dossier([make_equipment(id="e1")], [], [make_contract(equipment_id="e1", end_date=date(2024, 6, 6))], NOW)

    assert dossier[0].active_contract is None
    assert dossier[0].service_logs == []
    assert dossier[0].payment_timeline == []
    assert dossier[0].total_due == 0
