import pytest
from django.core.management import call_command

from logistics_core.models import Item, Member


@pytest.mark.django_db
def test_seed_is_idempotent():
    call_command("seed_trade_event")
    call_command("seed_trade_event")

    assert Member.objects.filter(first_name="Guybrush").count() == 1
    assert Item.objects.get(pk=123).status == "pending"
    assert Item.objects.get(pk=456).recipient.full_name == "Usuario de Prueba"


@pytest.mark.django_db
def test_seed_reset_status_restores_initial_custody():
    call_command("seed_trade_event")
    Item.objects.filter(pk=21).update(status="delivered")

    call_command("seed_trade_event")
    assert Item.objects.get(pk=21).status == "delivered"

    call_command("seed_trade_event", "--reset-status")
    assert Item.objects.get(pk=21).status == "pending"
