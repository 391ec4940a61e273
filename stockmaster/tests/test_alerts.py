"""
Tests for low-stock alerts.
"""

from decimal import Decimal

import pytest

from stockmaster import stock, StockError
from stockmaster.models import LedgerEntry, LowStockAlert
from stockmaster.services.alerts import StockAlerts


pytestmark = pytest.mark.django_db


class TestAlertTrigger:
    """Alert fires iff balance <= reorder level and reorder level > 0."""

    def test_no_alert_above_reorder_level(self, product, main, receive):
        receive(product, main, 6)

        assert not LowStockAlert.objects.exists()

    def test_alert_at_reorder_level(self, product, main, receive):
        receive(product, main, 5)

        alert = LowStockAlert.objects.get()
        assert alert.product == product
        assert alert.warehouse == main
        assert alert.current_quantity == Decimal('5')
        assert alert.reorder_level == Decimal('5')
        assert not alert.is_acknowledged

    def test_alert_below_reorder_level(self, product, main, receive):
        receive(product, main, 10)
        stock.adjust(product, main, -6, reason='damaged')

        alert = LowStockAlert.objects.get()
        assert alert.current_quantity == Decimal('4')
        assert 'Widget' in alert.message

    def test_zero_reorder_level_never_alerts(self, untracked_product, main, receive):
        receive(untracked_product, main, 1)
        stock.adjust(untracked_product, main, -1, reason='lost')

        assert stock.balance(untracked_product, main) == Decimal('0')
        assert not LowStockAlert.objects.exists()

    def test_alerts_are_per_warehouse(self, product, main, overflow, receive):
        receive(product, main, 10)
        stock.transfer(product, main, overflow, 3)

        alert = LowStockAlert.objects.get()
        assert alert.warehouse == overflow


class TestAlertDedupe:
    """No new alert while one is unacknowledged for the same key."""

    def test_open_alert_suppresses_new_ones(self, product, main, receive):
        receive(product, main, 10)
        stock.adjust(product, main, -6, reason='damaged')
        stock.adjust(product, main, -1, reason='damaged')
        stock.adjust(product, main, -1, reason='damaged')

        assert LowStockAlert.objects.count() == 1

    def test_acknowledge_rearms(self, product, main, receive):
        receive(product, main, 10)
        stock.adjust(product, main, -6, reason='damaged')
        stock.acknowledge_alert(LowStockAlert.objects.get().pk)

        stock.adjust(product, main, -1, reason='damaged')

        assert LowStockAlert.objects.count() == 2
        assert LowStockAlert.objects.open().count() == 1


class TestAcknowledge:
    """Tests for stock.acknowledge_alert()."""

    @pytest.fixture
    def alert(self, product, main, receive):
        receive(product, main, 3)
        return LowStockAlert.objects.get()

    def test_sets_acknowledgment_fields(self, alert, user):
        acknowledged = stock.acknowledge_alert(alert.pk, user=user)

        assert acknowledged.is_acknowledged
        assert acknowledged.acknowledged_by == user
        assert acknowledged.acknowledged_at is not None

    def test_through_alerts_service(self, alert, user):
        assert [a.pk for a in StockAlerts.list_alerts(acknowledged=False)] == [alert.pk]

        StockAlerts.acknowledge_alert(alert.pk, user=user)

        assert StockAlerts.list_alerts(acknowledged=False) == []
        assert [a.pk for a in StockAlerts.list_alerts(acknowledged=True)] == [alert.pk]

    def test_twice_is_rejected(self, alert):
        stock.acknowledge_alert(alert.pk)

        with pytest.raises(StockError) as exc:
            stock.acknowledge_alert(alert.pk)

        assert exc.value.code == 'ALREADY_ACKNOWLEDGED'

    def test_does_not_touch_stock(self, alert, product, main):
        entries = LedgerEntry.objects.count()

        stock.acknowledge_alert(alert.pk)

        assert LedgerEntry.objects.count() == entries
        assert stock.balance(product, main) == Decimal('3')

    def test_unknown_alert(self, db):
        with pytest.raises(StockError) as exc:
            stock.acknowledge_alert(999)

        assert exc.value.code == 'NOT_FOUND'

    def test_list_filters_by_acknowledgment(self, alert, product, overflow, receive):
        receive(product, overflow, 1)
        stock.acknowledge_alert(alert.pk)

        assert len(stock.list_alerts()) == 2
        assert [a.warehouse for a in stock.list_alerts(acknowledged=False)] == [overflow]
        assert [a.pk for a in stock.list_alerts(acknowledged=True)] == [alert.pk]
