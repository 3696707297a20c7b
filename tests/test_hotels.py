"""
Unit tests for hotel search and hotel details.
"""
import uuid
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from stayhub import models, schemas
from stayhub.errors import ValidationFailed
from stayhub.services import availability, hotel_search


def names(response):
    return [h["name"] for h in response.json()["hotels"]]


class TestHotelSearch:
    """Tests for GET /api/hotels."""

    def test_no_filters_returns_active_hotels_best_rated_first(self, client, catalog):
        """Test every active hotel is returned, sorted by rating."""
        response = client.get("/api/hotels")
        assert response.status_code == 200
        assert names(response) == [
            "Grand Bangkok",
            "Riverside Bangkok",
            "Phuket Beach",
            "Ubud Retreat",
            "Noi Guesthouse",
        ]

    def test_rating_ties_keep_creation_order(self, db_session, catalog):
        hotels = hotel_search.search_hotels(db_session, schemas.HotelSearchFilters())
        four_star = [h.name for h in hotels if h.star_rating == 4]
        assert four_star == ["Riverside Bangkok", "Phuket Beach"]

    def test_destination_exact_match(self, client, catalog):
        """Test destination matches the city name exactly, not as a substring."""
        response = client.get("/api/hotels", params={"destination": "Bangkok"})
        assert response.status_code == 200
        assert names(response) == ["Grand Bangkok", "Riverside Bangkok"]

    def test_destination_ignores_case_and_whitespace(self, client, catalog):
        response = client.get("/api/hotels", params={"destination": "  bAnGkOk "})
        assert names(response) == ["Grand Bangkok", "Riverside Bangkok"]

    def test_destination_prefix_does_not_match(self, client, catalog):
        response = client.get("/api/hotels", params={"destination": "Bang"})
        assert response.status_code == 200
        assert names(response) == []

    def test_legacy_city_id_parameter(self, client, catalog):
        """Test older clients sending the city name as city_id still work."""
        response = client.get("/api/hotels", params={"city_id": "phuket"})
        assert names(response) == ["Phuket Beach"]

    def test_empty_destination_is_no_filter(self, client, catalog):
        response = client.get("/api/hotels", params={"destination": ""})
        assert response.status_code == 200
        assert len(names(response)) == 5

    def test_unknown_destination_is_empty_not_error(self, client, catalog):
        response = client.get("/api/hotels", params={"destination": "Atlantis"})
        assert response.status_code == 200
        assert response.json() == {"hotels": []}

    def test_country_filter(self, client, catalog):
        indonesia = catalog["countries"]["indonesia"]
        response = client.get("/api/hotels", params={"country_id": indonesia.id})
        assert names(response) == ["Ubud Retreat"]

    def test_destination_takes_precedence_over_country(self, client, catalog):
        indonesia = catalog["countries"]["indonesia"]
        response = client.get(
            "/api/hotels",
            params={"destination": "Phuket", "country_id": indonesia.id},
        )
        assert names(response) == ["Phuket Beach"]

    def test_invalid_country_id(self, client, catalog):
        """Test a non-UUID country id is a validation error."""
        response = client.get("/api/hotels", params={"country_id": "thailand"})
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "country_id"

    def test_num_guests_filter(self, client, catalog):
        """Test only hotels with an active room type fitting the party remain."""
        response = client.get("/api/hotels", params={"num_guests": 4})
        # the 6-guest villa is inactive
        assert names(response) == ["Riverside Bangkok"]

    def test_num_guests_must_be_positive(self, client, catalog):
        response = client.get("/api/hotels", params={"num_guests": 0})
        assert response.status_code == 400

    def test_invalid_date_format(self, client, catalog):
        response = client.get("/api/hotels", params={"check_in_date": "01/05/2026"})
        assert response.status_code == 400

    def test_inverted_dates(self, client, catalog):
        response = client.get(
            "/api/hotels",
            params={"check_in_date": "2026-05-03", "check_out_date": "2026-05-01"},
        )
        assert response.status_code == 400

    def test_inverted_dates_in_service(self, db_session, catalog):
        filters = schemas.HotelSearchFilters(
            check_in_date=date(2026, 5, 3), check_out_date=date(2026, 5, 3)
        )
        with pytest.raises(ValidationFailed):
            hotel_search.search_hotels(db_session, filters)


class TestHotelDetails:
    """Tests for the joined data on each hotel."""

    def test_joined_city_country_amenities_images(self, client, catalog):
        response = client.get("/api/hotels", params={"destination": "Bangkok"})
        riverside = next(h for h in response.json()["hotels"] if h["name"] == "Riverside Bangkok")

        assert riverside["city"]["name"] == "Bangkok"
        assert riverside["city"]["country"]["code"] == "TH"
        assert sorted(a["name"] for a in riverside["amenities"]) == ["Pool", "WiFi"]
        assert [img["image_url"] for img in riverside["images"]] == ["a.jpg", "b.jpg"]
        assert riverside["images"][0]["is_primary"] is True

    def test_room_types_without_dates(self, client, catalog):
        """Test room types carry the nightly price and their room count."""
        response = client.get("/api/hotels", params={"destination": "Bangkok"})
        grand = next(h for h in response.json()["hotels"] if h["name"] == "Grand Bangkok")
        suite = grand["room_types"][0]
        assert suite["current_price"] == 300.0
        assert suite["total_price"] == 300.0
        assert suite["available_rooms"] == 5

    def test_room_types_with_dates(self, client, db_session, catalog):
        """Test dated searches report rooms free for the stay and its total."""
        deluxe = catalog["room_types"]["riverside_deluxe"]
        availability.hold_rooms(db_session, deluxe.id, date(2026, 5, 2), date(2026, 5, 3), 2)
        db_session.commit()

        response = client.get(
            "/api/hotels",
            params={
                "destination": "Bangkok",
                "check_in_date": "2026-05-01",
                "check_out_date": "2026-05-04",
            },
        )
        riverside = next(h for h in response.json()["hotels"] if h["name"] == "Riverside Bangkok")
        by_name = {rt["name"]: rt for rt in riverside["room_types"]}
        assert by_name["Deluxe"]["available_rooms"] == 1
        assert by_name["Deluxe"]["total_price"] == 300.0
        assert by_name["Family"]["available_rooms"] == 2
        assert by_name["Family"]["total_price"] == 540.0

    def test_get_hotel(self, client, catalog):
        hotel = catalog["hotels"]["ubud"]
        response = client.get(f"/api/hotels/{hotel.id}")
        assert response.status_code == 200
        assert response.json()["hotel"]["name"] == "Ubud Retreat"

    def test_get_inactive_hotel(self, client, catalog):
        hotel = catalog["hotels"]["closed"]
        assert client.get(f"/api/hotels/{hotel.id}").status_code == 404

    def test_get_unknown_hotel(self, client, catalog):
        assert client.get(f"/api/hotels/{uuid.uuid4()}").status_code == 404


class TestPrimaryImage:
    """Tests for one primary image per owner."""

    def test_second_primary_image_rejected(self, db_session, catalog):
        hotel = catalog["hotels"]["riverside"]
        db_session.add(models.HotelImage(hotel_id=hotel.id, image_url="c.jpg", is_primary=True))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_primary_images_on_different_hotels(self, db_session, catalog):
        hotel = catalog["hotels"]["grand"]
        db_session.add(models.HotelImage(hotel_id=hotel.id, image_url="g.jpg", is_primary=True))
        db_session.commit()

    def test_many_non_primary_images(self, db_session, catalog):
        room_type = catalog["room_types"]["grand_suite"]
        db_session.add_all(
            [
                models.RoomTypeImage(room_type_id=room_type.id, image_url="1.jpg", sort_order=1),
                models.RoomTypeImage(room_type_id=room_type.id, image_url="2.jpg", sort_order=2),
                models.RoomTypeImage(room_type_id=room_type.id, image_url="3.jpg", is_primary=True),
            ]
        )
        db_session.commit()
