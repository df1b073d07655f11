import pytest

from checkout.application.order_service import OrderIntakeService
from checkout.domain.validation import OrderValidationError


@pytest.fixture
def service(repo):
    return OrderIntakeService(order_repo=repo, unit_price_cents=14900)


class TestCreateOrder:

    def test_prices_from_unit_price(self, service, repo, valid_order):
        receipt = service.create_order(valid_order)
        assert receipt.total_cents == 29800
        assert repo.rows[0]["unit_price_cents"] == 14900
        assert repo.rows[0]["total_cents"] == 14900 * 2

    @pytest.mark.parametrize("qty", [1, 5, 10])
    def test_total_is_exact(self, service, valid_order, qty):
        assert service.create_order({**valid_order, "qty": qty}).total_cents == 14900 * qty

    def test_missing_qty_defaults_to_one(self, service, valid_order):
        raw = dict(valid_order)
        del raw["qty"]
        assert service.create_order(raw).total_cents == 14900

    def test_decimal_string_qty_priced_like_float(self, service, valid_order):
        assert service.create_order({**valid_order, "qty": "2.0"}).total_cents == 29800
        assert service.create_order({**valid_order, "qty": 2.0}).total_cents == 29800

    def test_invalid_order_is_not_persisted(self, service, repo, valid_order):
        with pytest.raises(OrderValidationError) as exc:
            service.create_order({**valid_order, "email": "a@b", "pin": "1234", "qty": 0})
        assert set(exc.value.errors) == {"email", "pin", "qty"}
        assert repo.rows == []

    def test_identical_submissions_create_two_orders(self, service, repo, valid_order):
        first = service.create_order(valid_order)
        second = service.create_order(valid_order)
        assert first.id != second.id
        assert len(repo.rows) == 2

    def test_stores_clean_values_and_metadata(self, service, repo, valid_order):
        service.create_order({**valid_order, "email": " ANN@X.COM "}, user_agent="pytest", ip="10.0.0.1")
        row = repo.rows[0]
        assert row["email"] == "ann@x.com"
        assert row["user_agent"] == "pytest"
        assert row["ip"] == "10.0.0.1"

    def test_repository_errors_propagate(self, service, repo, valid_order):
        repo.fail_with = RuntimeError("connection reset")
        with pytest.raises(RuntimeError):
            service.create_order(valid_order)


class TestHealth:

    def test_delegates_to_repository(self, service):
        assert service.check_health()["version"].startswith("PostgreSQL")
