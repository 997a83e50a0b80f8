from datetime import date

import pytest

from core.errors import ValidationFailure
from core.liability import (
    LiabilitySource,
    PaymentMethod,
    aggregate_liability,
    apply_payment,
    compute_remaining,
)
from factories import make_equipment, make_log


def test_remaining_is_price_minus_paid():
    assert compute_remaining(100000, 40000) == 60000


def test_remaining_is_not_clamped_on_entry():
    assert compute_remaining(100, 150) == -50


def test_payment_settles_balance():
    asset = make_equipment(purchase_price=100000, paid_amount=40000, remaining_amount=60000)

    result = apply_payment(asset, 60000, date(2024, 6, 1), total_cost=asset.purchase_price)

    assert result.paid_amount == 100000
    assert result.remaining_amount == 0
    assert result.overpayment == 0
    assert result.record.date == date(2024, 6, 1)


@pytest.mark.parametrize("old_paid,amount", [(0, 10), (40, 25.5), (90, 30), (120, 1)])
def test_remaining_invariant(old_paid, amount):
    log = make_log(cost=100, paid_amount=old_paid)

    result = apply_payment(log, amount, total_cost=log.cost)

    assert result.paid_amount == old_paid + amount
    assert result.remaining_amount == max(0, 100 - (old_paid + amount))


def test_overpayment_is_reported():
    log = make_log(cost=100, paid_amount=80, remaining_amount=20)

    result = apply_payment(log, 50, total_cost=log.cost)

    assert result.remaining_amount == 0
    assert result.overpayment == 30


def test_overpayment_rejected_when_disallowed():
    log = make_log(cost=100, paid_amount=80, remaining_amount=20)

    with pytest.raises(ValidationFailure) as exc_info:
        apply_payment(log, 50, total_cost=log.cost, allow_overpayment=False)

    assert exc_info.value.field == "amount"


@pytest.mark.parametrize("amount", [0, -5])
def test_non_positive_payment_rejected(amount):
    with pytest.raises(ValidationFailure):
        apply_payment(make_log(cost=100), amount, total_cost=100)


def test_history_is_copied_and_appended():
    history = [{"id": "p0", "amount": 10.0, "date": "2024-01-01", "method": "Cash", "note": ""}]
    log = make_log(cost=100, paid_amount=10, payment_history=history)

    result = apply_payment(log, 20, date(2024, 2, 1), PaymentMethod.BANK_TRANSFER, "second", total_cost=100)

    assert len(history) == 1
    assert [p["amount"] for p in result.payment_history] == [10.0, 20.0]
    assert result.payment_history[-1]["method"] == "Bank Transfer"
    assert result.payment_history[-1]["date"] == "2024-02-01"


def test_aggregate_liability():
    equipment = [
        make_equipment(id="e1", name="MRI", remaining_amount=5000, supplier_name="Siemens"),
        make_equipment(id="e2", name="CT", remaining_amount=0),
        make_equipment(id="e3", name="X-Ray", remaining_amount=-20),
    ]
    logs = [
        make_log(id="l1", remaining_amount=800, company_name=None),
        make_log(id="l2", remaining_amount=9000, equipment_name=None, company_name="Medserve"),
    ]

    summary = aggregate_liability(equipment, logs)

    assert summary.purchase_outstanding == 5000
    assert summary.purchase_count == 1
    assert summary.service_outstanding == 9800
    assert summary.service_count == 2
    assert summary.total_outstanding == 14800
    assert summary.total_count == 3
    assert [item.id for item in summary.items] == ["l2", "e1", "l1"]
    assert summary.items[0].name == "Unknown"
    assert summary.items[1].source == LiabilitySource.EQUIPMENT
    assert summary.items[2].provider == "Unknown Vendor"
