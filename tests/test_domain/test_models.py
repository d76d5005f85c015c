"""
Unit tests for domain model validation and derived fields
"""
import pytest
from decimal import Decimal
from pydantic import ValidationError

from storefront.domain.user import RegisterRequest
from storefront.domain.wefullfil import WeFulFilProduct, WeFulFilProductFilter


def _registration(**overrides) -> dict:
    data = {
        'name': 'Sipho Dlamini',
        'email': 'sipho@example.com',
        'password': 'Secret123',
        'confirm_password': 'Secret123',
        'role': 'consumer',
        'terms': True,
    }
    data.update(overrides)
    return data


class TestRegisterRequest:

    def test_valid_registration(self):
        request = RegisterRequest(**_registration(role='vendor'))
        assert request.role == 'vendor'

    @pytest.mark.parametrize("password", ["short1A", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"])
    def test_weak_passwords_rejected(self, password):
        with pytest.raises(ValidationError):
            RegisterRequest(**_registration(password=password, confirm_password=password))

    def test_passwords_must_match(self):
        with pytest.raises(ValidationError, match="Passwords don't match"):
            RegisterRequest(**_registration(confirm_password='Different123'))

    def test_terms_must_be_accepted(self):
        with pytest.raises(ValidationError, match="terms"):
            RegisterRequest(**_registration(terms=False))

    def test_name_needs_two_characters(self):
        with pytest.raises(ValidationError):
            RegisterRequest(**_registration(name='S'))

    def test_admin_role_cannot_self_register(self):
        with pytest.raises(ValidationError):
            RegisterRequest(**_registration(role='admin'))


class TestProduct:

    def test_discount_percentage(self, product_factory):
        product = product_factory(price=Decimal('75.00'), compare_at_price=Decimal('100.00'))

        assert product.is_on_sale
        assert product.discount_percentage == pytest.approx(25.0)

    def test_not_on_sale_without_higher_compare_price(self, product_factory):
        product = product_factory(price=Decimal('100.00'), compare_at_price=Decimal('90.00'))

        assert not product.is_on_sale
        assert product.discount_percentage == 0.0

    def test_to_dict_converts_money_to_float(self, product_factory):
        data = product_factory(price=Decimal('499.00')).to_dict()

        assert data['price'] == 499.0
        assert data['is_on_sale'] is False


class TestWeFulFilProduct:

    def test_listing_shape(self):
        product = WeFulFilProduct(id=42, title="Desk Lamp", inventory_quantity=3, categories=["Home"])

        assert product.id == "42"
        assert product.in_stock
        assert product.primary_category == "Home"

    def test_export_shape_is_normalized(self):
        product = WeFulFilProduct.model_validate({
            'id': 7,
            'name': 'Yoga Mat',
            'quantity': 0,
            'category': 'Fitness',
            'price': '199.90',
        })

        assert product.title == 'Yoga Mat'
        assert product.inventory_quantity == 0
        assert not product.in_stock
        assert product.categories == ['Fitness']
        assert product.price == Decimal('199.90')

    def test_primary_category_defaults_to_imported(self):
        assert WeFulFilProduct(id="1", title="Thing").primary_category == "Imported"

    def test_filter_params_skip_empty_values(self):
        params = WeFulFilProductFilter(search="", page=2).to_params()

        assert 'search' not in params
        assert params['page'] == '2'
        assert params['sort_by'] == 'title'
