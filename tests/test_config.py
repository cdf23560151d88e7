from __future__ import annotations

import pytest

from tableorder.config import StoreConfig, parse_categories
from tableorder.exceptions import StoreConfigError
from tableorder.models.menu import ItemCategory


def test_parse_categories_names_and_images() -> None:
    categories = parse_categories("burgers=assets/burger.png, pizzas ,,tacos=")
    assert categories == (
        ItemCategory(name="burgers", image="assets/burger.png"),
        ItemCategory(name="pizzas"),
        ItemCategory(name="tacos"),
    )


@pytest.mark.parametrize("value", ["burgers,burgers", "=assets/x.png"])
def test_parse_categories_rejects_bad_entries(value: str) -> None:
    with pytest.raises(StoreConfigError):
        parse_categories(value)


def test_plain_names_are_coerced() -> None:
    config = StoreConfig(categories=("burgers", ItemCategory(name="pizzas", image="p.png")))  # type: ignore[arg-type]
    assert config.category_names == ("burgers", "pizzas")
    assert config.categories[1].image == "p.png"


def test_duplicate_names_rejected() -> None:
    with pytest.raises(StoreConfigError):
        StoreConfig(categories=(ItemCategory(name="a"), ItemCategory(name="a")))


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TABLEORDER_CATEGORIES", "kebabs,dessert=assets/dessert.png")
    monkeypatch.setenv("TABLEORDER_CURRENCY", "EUR")
    monkeypatch.setenv("TABLEORDER_FETCH_ON_START", "no")

    config = StoreConfig.from_env()

    assert config.category_names == ("kebabs", "dessert")
    assert config.currency == "EUR"
    assert config.fetch_on_start is False


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TABLEORDER_CATEGORIES", "kebabs")
    monkeypatch.setenv("TABLEORDER_CURRENCY", "EUR")

    config = StoreConfig.from_env(categories=("sandwich",), currency="USD")

    assert config.category_names == ("sandwich",)
    assert config.currency == "USD"


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("TABLEORDER_CATEGORIES", "TABLEORDER_CURRENCY", "TABLEORDER_FETCH_ON_START"):
        monkeypatch.delenv(key, raising=False)

    config = StoreConfig.from_env()

    assert config.categories == ()
    assert config.currency == "DZD"
    assert config.fetch_on_start is True


def test_blank_currency_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TABLEORDER_CURRENCY", "  ")
    with pytest.raises(StoreConfigError):
        StoreConfig.from_env()


@pytest.mark.parametrize("value", ["maybe", "", "2"])
def test_unknown_fetch_on_start_word_rejected(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("TABLEORDER_FETCH_ON_START", value)
    with pytest.raises(StoreConfigError, match="TABLEORDER_FETCH_ON_START"):
        StoreConfig.from_env()


def test_fetch_on_start_override_skips_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TABLEORDER_FETCH_ON_START", "maybe")
    assert StoreConfig.from_env(fetch_on_start=False).fetch_on_start is False
