from datetime import date, datetime, timedelta, timezone

from core.coverage import (
    CoverageKind,
    ExpiryStatus,
    LicenseStatus,
    audit_coverage,
    compute_warranty_expiry,
    coverage_conflict,
    expiry_status,
    license_renewal_due,
    license_status,
    resolve_coverage,
)
from factories import NOW, make_contract, make_equipment


def test_warranty_expiry_adds_days():
    assert compute_warranty_expiry(date(2024, 1, 1), 365) == date(2024, 12, 31)


def test_warranty_expiry_needs_both_inputs():
    assert compute_warranty_expiry(None, 365) is None
    assert compute_warranty_expiry(date(2024, 1, 1), None) is None


def test_warranty_wins_over_contract():
    asset = make_equipment(has_warranty=True, warranty_expiry_date=date(2024, 12, 31))
    contracts = [make_contract(end_date=date(2025, 6, 1), type="CMC")]

    coverage = resolve_coverage(asset, contracts, NOW)

    assert coverage.kind == CoverageKind.WARRANTY
    assert coverage.expiry_date == date(2024, 12, 31)
    assert coverage.contract_id is None


def test_contract_covers_after_warranty_lapses():
    now = datetime(2024, 6, 7)
    asset = make_equipment(has_warranty=True, warranty_expiry_date=date(2024, 1, 1))
    contracts = [make_contract(end_date=date(2024, 7, 22), type="CMC")]

    coverage = resolve_coverage(asset, contracts, now)

    assert coverage.kind == CoverageKind.CONTRACT
    assert coverage.days_remaining == 45
    assert coverage.contract_type == "CMC"


def test_days_remaining_rounds_partial_days_up():
    asset = make_equipment()
    contracts = [make_contract(end_date=date(2024, 7, 22))]

    # 44 days and some hours left
    assert resolve_coverage(asset, contracts, NOW).days_remaining == 45


def test_latest_contract_is_reported():
    asset = make_equipment()
    contracts = [
        make_contract(id="short", end_date=date(2024, 8, 1)),
        make_contract(id="long", end_date=date(2025, 8, 1)),
        make_contract(id="other-asset", equipment_id="eq-2", end_date=date(2030, 1, 1)),
    ]

    assert resolve_coverage(asset, contracts, NOW).contract_id == "long"


def test_cover_ending_today_still_counts():
    asset = make_equipment(has_warranty=True, warranty_expiry_date=NOW.date())

    coverage = resolve_coverage(asset, [], NOW)

    assert coverage.kind == CoverageKind.WARRANTY
    assert coverage.days_remaining == 0


def test_aware_time_is_judged_in_utc():
    asset = make_equipment(has_warranty=True, warranty_expiry_date=date(2024, 6, 7))
    # 01:00 on June 8 at UTC+2 is still June 7 in UTC
    now = datetime(2024, 6, 8, 1, 0, tzinfo=timezone(timedelta(hours=2)))

    coverage = resolve_coverage(asset, [], now)

    assert coverage.kind == CoverageKind.WARRANTY
    assert coverage.days_remaining == 0
    assert expiry_status(date(2024, 6, 7), now) == ExpiryStatus.EXPIRING_SOON


def test_warranty_flag_off_means_no_warranty():
    asset = make_equipment(has_warranty=False, warranty_expiry_date=date(2030, 1, 1))

    assert resolve_coverage(asset, [], NOW).kind == CoverageKind.NONE


def test_gap_audit_counts_each_asset_once():
    assets = [
        make_equipment(id="both", has_warranty=True, warranty_expiry_date=date(2025, 1, 1)),
        make_equipment(id="contract"),
        make_equipment(id="bare"),
        make_equipment(id="lapsed", has_warranty=True, warranty_expiry_date=date(2023, 1, 1)),
    ]
    contracts = [
        make_contract(id="c1", equipment_id="both"),
        make_contract(id="c2", equipment_id="contract"),
        make_contract(id="c3", equipment_id="lapsed", end_date=date(2024, 1, 1)),
    ]

    audit = audit_coverage(assets, contracts, NOW)

    assert audit.total == 4
    assert audit.warranty_count == 1
    assert audit.contract_count == 1
    assert audit.uncovered_count == audit.total - audit.warranty_count - audit.contract_count
    assert audit.uncovered_ids == ["bare", "lapsed"]


def test_conflict_reports_existing_contract_first():
    asset = make_equipment(has_warranty=True, warranty_expiry_date=date(2025, 1, 1))
    contracts = [make_contract(end_date=date(2026, 3, 1))]

    warning = coverage_conflict(asset, contracts, NOW)

    assert "Maintenance Contract until 2026-03-01" in warning


def test_conflict_reports_warranty():
    asset = make_equipment(has_warranty=True, warranty_expiry_date=date(2025, 1, 1))

    assert "Warranty until 2025-01-01" in coverage_conflict(asset, [], NOW)


def test_conflict_ignores_contract_being_edited():
    asset = make_equipment()
    contracts = [make_contract(id="self")]

    assert coverage_conflict(asset, contracts, NOW, exclude_contract_id="self") is None


def test_expiry_labels():
    assert expiry_status(date(2024, 6, 6), NOW) == ExpiryStatus.EXPIRED
    assert expiry_status(date(2024, 6, 7), NOW) == ExpiryStatus.EXPIRING_SOON
    assert expiry_status(date(2024, 7, 7), NOW) == ExpiryStatus.EXPIRING_SOON
    assert expiry_status(date(2024, 7, 8), NOW) == ExpiryStatus.ACTIVE
    assert expiry_status(date(2024, 7, 8), NOW, window_days=60) == ExpiryStatus.EXPIRING_SOON


def test_license_status():
    assert license_status(None, NOW) == LicenseStatus.INCOMPLETE
    assert license_status({"name": "AERB"}, NOW) == LicenseStatus.INCOMPLETE
    assert license_status({"expiry_date": "2024-01-01"}, NOW) == LicenseStatus.EXPIRED
    assert license_status({"expiry_date": "2024-06-20"}, NOW) == LicenseStatus.DUE_SOON
    assert license_status({"expiry_date": "2025-06-20"}, NOW) == LicenseStatus.VALID


def test_license_renewal_due_uses_lead_time():
    asset = make_equipment(
        license_required=True,
        license_info={"expiry_date": "2024-07-01", "renewal_lead_days": 20},
    )

    assert license_renewal_due(asset, datetime(2024, 6, 10)) is False
    assert license_renewal_due(asset, datetime(2024, 6, 11)) is True


def test_license_renewal_not_due_when_not_required():
    asset = make_equipment(license_required=False, license_info={"expiry_date": "2024-06-01"})

    assert license_renewal_due(asset, NOW) is False
