from sqlmodel import Session

import pytest

from workshop.core.errors import NotFoundError
from workshop.models.domain import Customer, Vehicle
from workshop.services import SearchService
from workshop.services.search_service import contains_letter, looks_like_order_number, looks_like_vin_suffix

from tests.utils.test_utils import make_order


class TestQueryShapes:
    def test_order_number_shape(self):
        assert looks_like_order_number("SRV-000001")
        assert looks_like_order_number("srv-12")
        assert not looks_like_order_number("SRV000001")

    def test_vin_suffix_shape(self):
        assert looks_like_vin_suffix("4352")
        assert looks_like_vin_suffix("A4B2")
        assert not looks_like_vin_suffix("43521")
        assert not looks_like_vin_suffix("43-2")

    def test_contains_letter(self):
        assert contains_letter("Juan")
        assert not contains_letter("12345")


class TestSearchService:
    """Test cases for unified search."""

    def test_short_query(self, db: Session, seed):
        response = SearchService(db).search("ab")

        assert response.success is False
        assert response.results == []

    def test_order_number_search(self, db: Session, seed):
        order = make_order(db, seed)

        response = SearchService(db).search("SRV-000001")

        assert response.success is True
        orders = [r for r in response.results if r.kind == "order"]
        assert [r.id for r in orders] == [order.id]
        assert orders[0].subtitle == "Juan Perez"

    def test_vin_suffix_search(self, db: Session, seed):
        response = SearchService(db).search("4352")

        assert [(r.kind, r.id) for r in response.results] == [("vehicle", seed.vehicle_id)]

    def test_customer_name_search(self, db: Session, seed):
        response = SearchService(db).search("perez")

        assert [(r.kind, r.id) for r in response.results] == [("customer", seed.customer_id)]

    def test_query_can_match_several_categories(self, db: Session, seed):
        customer = Customer(full_name="Maria ABCD Lopez", tax_id="X", mobile_phone="1")
        db.add(customer)
        db.commit()
        db.add(Vehicle(customer_id=customer.id, vin="JH4KA7560MCABCD", make="Acura"))
        db.commit()

        response = SearchService(db).search("abcd")

        assert {r.kind for r in response.results} == {"vehicle", "customer"}
        assert response.total == 2

    def test_results_capped_per_category(self, db: Session, seed):
        db.add_all([Customer(full_name=f"Lopez {i}", tax_id="X", mobile_phone=str(i)) for i in range(15)])
        db.commit()

        response = SearchService(db).search("Lopez")

        assert response.total == 10

    def test_no_results(self, db: Session, seed):
        response = SearchService(db).search("Zzyzx")

        assert response.success is False
        assert "No results" in response.message

    def test_find_order(self, db: Session, seed):
        order = make_order(db, seed)

        assert SearchService(db).find_order("srv-000001").id == order.id
        with pytest.raises(NotFoundError):
            SearchService(db).find_order("SRV-999999")
