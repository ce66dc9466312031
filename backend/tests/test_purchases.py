# Overview: Pytest coverage for purchases and the receipt requirement.

from datetime import date, datetime

import pytest

from mineor.errors import ValidationError
from mineor.models import Purchase
from mineor.services import purchase_service
from mineor.services.purchase_service import ReceiptRequiredError

RECEIPT = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQ=="


class TestReceiptRule:
    @pytest.mark.parametrize("receipt", [None, "", "   "])
    def test_purchase_without_receipt_is_rejected(self, db_session, site_a, receipt):
        with pytest.raises(ReceiptRequiredError):
            purchase_service.create_purchase(site_a.id, item="Gasoil", amount=120, receipt_photo=receipt)
        assert db_session.query(Purchase).count() == 0

    def test_receipt_error_is_a_validation_error(self):
        assert issubclass(ReceiptRequiredError, ValidationError)

    def test_purchase_with_receipt_is_retrievable(self, db_session, site_a):
        purchase = purchase_service.create_purchase(
            site_a.id, item="Gasoil", amount=120.5, currency="USD", supplier="Total Kolwezi",
            category="transport", receipt_photo=RECEIPT,
        )

        stored = purchase_service.get_purchase(purchase.id)
        assert stored.item == "Gasoil"
        assert stored.amount == 120.5
        assert stored.receipt_photo == RECEIPT

    def test_update_keeps_receipt_when_omitted(self, db_session, site_a):
        purchase = purchase_service.create_purchase(site_a.id, item="Gasoil", amount=10, receipt_photo=RECEIPT)
        updated = purchase_service.update_purchase(purchase.id, amount=15)
        assert updated.receipt_photo == RECEIPT
        assert updated.amount == 15

    def test_update_rejects_blank_receipt(self, db_session, site_a):
        purchase = purchase_service.create_purchase(site_a.id, item="Gasoil", amount=10, receipt_photo=RECEIPT)
        with pytest.raises(ReceiptRequiredError):
            purchase_service.update_purchase(purchase.id, receipt_photo="")


class TestPurchaseFields:
    def test_date_and_time_default_to_entry_moment(self, db_session, site_a):
        purchase = purchase_service.create_purchase(site_a.id, item="Pelles", amount=40, receipt_photo=RECEIPT)
        assert isinstance(purchase.purchase_date, date)
        assert len(purchase.purchase_time) == 5 and purchase.purchase_time[2] == ":"

    def test_invalid_category(self, db_session, site_a):
        with pytest.raises(ValidationError):
            purchase_service.create_purchase(
                site_a.id, item="X", amount=1, category="food", receipt_photo=RECEIPT
            )

    def test_range_and_totals(self, db_session, site_a, site_b):
        purchase_service.create_purchase(site_a.id, item="A", amount=10, receipt_photo=RECEIPT,
                                         purchase_date="2024-01-01", purchase_time="08:00")
        purchase_service.create_purchase(site_a.id, item="B", amount=20, currency="CDF", receipt_photo=RECEIPT,
                                         purchase_date="2024-01-02", purchase_time="09:30")
        purchase_service.create_purchase(site_a.id, item="C", amount=30, receipt_photo=RECEIPT,
                                         purchase_date="2024-01-09", purchase_time="10:00")
        purchase_service.create_purchase(site_b.id, item="D", amount=99, receipt_photo=RECEIPT,
                                         purchase_date="2024-01-02", purchase_time="10:00")

        rows = purchase_service.purchases_between(site_a.id, "2024-01-01", "2024-01-02")
        assert [p.item for p in rows] == ["A", "B"]
        assert purchase_service.totals_by_currency(rows) == {"USD": 10, "CDF": 20}

    def test_to_dict_can_omit_receipt(self, db_session, site_a):
        purchase = purchase_service.create_purchase(site_a.id, item="A", amount=1, receipt_photo=RECEIPT)
        assert "receipt_photo" not in purchase.to_dict(include_receipt=False)
        assert purchase.to_dict()["receipt_photo"] == RECEIPT

    @pytest.mark.parametrize("amount", ["nan", "inf", float("-inf")])
    def test_non_finite_amount_rejected(self, db_session, site_a, amount):
        with pytest.raises(ValidationError, match="finite"):
            purchase_service.create_purchase(site_a.id, item="Gasoil", amount=amount, receipt_photo=RECEIPT)

    @pytest.mark.parametrize("clock", ["99:99", "24:00", "7:05", "0705"])
    def test_malformed_time_rejected(self, db_session, site_a, clock):
        with pytest.raises(ValidationError, match="HH:MM"):
            purchase_service.create_purchase(site_a.id, item="A", amount=1, receipt_photo=RECEIPT,
                                             purchase_time=clock)

    def test_time_checked_on_update(self, db_session, site_a):
        purchase = purchase_service.create_purchase(site_a.id, item="A", amount=1, receipt_photo=RECEIPT,
                                                    purchase_time="23:59")
        with pytest.raises(ValidationError):
            purchase_service.update_purchase(purchase.id, purchase_time="12:60")
        assert purchase_service.update_purchase(purchase.id, purchase_time="00:00").purchase_time == "00:00"

    def test_default_time_uses_site_wall_clock(self, db_session, site_a, monkeypatch):
        monkeypatch.setattr(purchase_service, "local_now", lambda: datetime(2024, 5, 2, 14, 5))
        purchase = purchase_service.create_purchase(site_a.id, item="A", amount=1, receipt_photo=RECEIPT)
        assert purchase.purchase_time == "14:05"


class TestPurchaseSearch:
    def test_matches_item_or_supplier(self, db_session, site_a):
        purchase_service.create_purchase(site_a.id, item="Gasoil", supplier="Total Kolwezi", amount=1,
                                         receipt_photo=RECEIPT)
        purchase_service.create_purchase(site_a.id, item="Pelles", supplier="Quincaillerie du Lac", amount=1,
                                         receipt_photo=RECEIPT)

        assert [p.item for p in purchase_service.search_purchases(site_a.id, text="gaso")] == ["Gasoil"]
        assert [p.item for p in purchase_service.search_purchases(site_a.id, text="LAC")] == ["Pelles"]
        assert len(purchase_service.search_purchases(site_a.id)) == 2
