import pytest

from models.product import LOW_STOCK, OUT_OF_STOCK
from services.product_form import (
    ADD,
    CLOSED,
    EDIT,
    ProductDraft,
    ProductForm,
    generate_id,
    validate_draft,
)
from services.product_store import ProductStore


def valid_draft(**overrides: str) -> ProductDraft:
    fields = {"name": "Stapler", "sku": "STN-100", "price": "5.5", "quantity": "3", "category": "stationery"}
    fields.update(overrides)
    return ProductDraft(**fields)


@pytest.fixture
def form(store: ProductStore) -> ProductForm:
    return ProductForm(store)


def test_valid_draft_has_no_errors(store: ProductStore) -> None:
    assert validate_draft(valid_draft(), store) == {}


def test_empty_draft_reports_every_field(store: ProductStore) -> None:
    errors = validate_draft(ProductDraft(), store)
    assert errors == {
        "name": "Name is required",
        "sku": "SKU is required",
        "price": "Price is required",
        "quantity": "Quantity is required",
        "category": "Category is required",
    }


def test_whitespace_only_counts_as_empty(store: ProductStore) -> None:
    errors = validate_draft(valid_draft(name="   ", sku="\t"), store)
    assert errors["name"] == "Name is required"
    assert errors["sku"] == "SKU is required"


@pytest.mark.parametrize("price", ["abc", "0", "-1", "nan", "inf", "0.001", "0.004", "1_000", "1e999"])
def test_bad_price(store: ProductStore, price: str) -> None:
    assert validate_draft(valid_draft(price=price), store) == {"price": "Price must be a number > 0"}


@pytest.mark.parametrize("quantity", ["abc", "-1", "2.5", "inf", "1_0", "0x10"])
def test_bad_quantity(store: ProductStore, quantity: str) -> None:
    assert validate_draft(valid_draft(quantity=quantity), store) == {
        "quantity": "Quantity must be an integer >= 0"
    }


def test_plain_number_forms_are_accepted(store: ProductStore) -> None:
    assert validate_draft(valid_draft(price=".5", quantity="+10"), store) == {}


def test_sub_cent_price_is_rejected_on_submit(form: ProductForm, store: ProductStore) -> None:
    before = store.products
    form.open_add()
    form.draft = valid_draft(price="0.001")

    assert form.submit() is None
    assert form.errors == {"price": "Price must be a number > 0"}
    assert store.products == before


def test_zero_quantity_is_allowed(store: ProductStore) -> None:
    assert validate_draft(valid_draft(quantity="0"), store) == {}


def test_unknown_category(store: ProductStore) -> None:
    errors = validate_draft(valid_draft(category="All"), store)
    assert errors == {"category": "Category must be one of the listed categories"}


def test_duplicate_sku_is_case_insensitive(store: ProductStore) -> None:
    errors = validate_draft(valid_draft(sku=" lmp-007 "), store)
    assert errors == {"sku": "SKU must be unique"}


def test_edited_product_may_keep_its_own_sku(store: ProductStore) -> None:
    assert validate_draft(valid_draft(sku="LMP-007"), store, edit_id="p6") == {}


def test_generate_id_is_short_and_unique() -> None:
    ids = {generate_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(len(i) == 12 for i in ids)


def test_open_add_starts_with_empty_draft(form: ProductForm) -> None:
    draft = form.open_add()
    assert form.mode == ADD
    assert form.edit_id is None
    assert draft == ProductDraft()


def test_open_edit_copies_product(form: ProductForm) -> None:
    draft = form.open_edit("p3")
    assert form.mode == EDIT
    assert form.edit_id == "p3"
    assert draft.name == "Notebook A5"
    assert draft.quantity == "0"


def test_open_edit_unknown_product(form: ProductForm) -> None:
    with pytest.raises(KeyError):
        form.open_edit("nope")


def test_submit_closed_form_raises(form: ProductForm) -> None:
    with pytest.raises(ValueError):
        form.submit()


def test_add_builds_clean_product(form: ProductForm, store: ProductStore) -> None:
    form.open_add()
    form.draft = valid_draft(name="  Stapler  ", sku=" STN-100 ", price="5.5", quantity="7")

    product = form.submit()

    assert product is not None
    assert product.name == "Stapler"
    assert product.sku == "STN-100"
    assert product.price == 5.5
    assert product.quantity == 7
    assert store.products[0] == product
    assert form.mode == CLOSED
    assert form.draft is None


def test_add_rounds_price_to_cents(form: ProductForm) -> None:
    form.open_add()
    form.draft = valid_draft(price="12.3456")
    assert form.submit().price == 12.35


def test_add_duplicate_sku_leaves_list_unchanged(form: ProductForm, store: ProductStore) -> None:
    before = store.products
    form.open_add()
    form.draft = valid_draft(name="Desk Lamp", sku="LMP-007")

    assert form.submit() is None

    assert form.errors == {"sku": "SKU must be unique"}
    assert form.mode == ADD
    assert store.products == before


def test_edit_p3_quantity_changes_status(form: ProductForm, store: ProductStore) -> None:
    assert store.get("p3").status == OUT_OF_STOCK
    form.open_edit("p3")
    form.draft.quantity = "5"

    product = form.submit()

    assert product.id == "p3"
    assert store.get("p3").quantity == 5
    assert store.get("p3").status == LOW_STOCK
    assert len(store) == 6


def test_failed_submit_then_fix_succeeds(form: ProductForm) -> None:
    form.open_add()
    form.draft = valid_draft(price="")
    assert form.submit() is None
    assert form.errors == {"price": "Price is required"}

    form.draft.price = "2"
    assert form.submit() is not None
    assert form.errors == {}


def test_cancel_discards_draft(form: ProductForm, store: ProductStore) -> None:
    form.open_edit("p1")
    form.draft.name = "Changed"
    form.cancel()

    assert form.mode == CLOSED
    assert form.draft is None
    assert store.get("p1").name == "Wireless Mouse"
