from sqlalchemy.exc import IntegrityError, OperationalError

from main import app
from apps.payments.services import get_payment_service
from factories import API


class FailingPaymentService:
    def __init__(self, exc):
        self.exc = exc

    def get_outstanding(self):
        raise self.exc


def test_unavailable_store_is_transient(client):
    app.dependency_overrides[get_payment_service] = lambda: FailingPaymentService(
        OperationalError("SELECT", {}, Exception("database is locked"))
    )

    response = client.get(f"{API}/payments/outstanding")

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "5"
    assert response.json()["kind"] == "transient"


def test_other_store_errors_are_permanent(client):
    app.dependency_overrides[get_payment_service] = lambda: FailingPaymentService(
        IntegrityError("INSERT", {}, Exception("constraint failed"))
    )

    response = client.get(f"{API}/payments/outstanding")

    assert response.status_code == 500
    assert response.json() == {"detail": "Database error: IntegrityError", "kind": "permanent"}
