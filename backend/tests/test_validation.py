"""
Vidly Backend — Payload Validation Unit Tests
==============================================

What:  Tests for the per-entity validators in vidly.validation.
Why:   Clients match on the exact 400 message, so the first-failure rule
       and the message wording must not drift.
How:   Pure function calls; no app, no database.

What we test:
    ✅ Valid payloads for every entity
    ✅ Length and range bounds (inclusive)
    ✅ Only the FIRST failing constraint is reported
    ✅ Unknown keys, wrong types, non-object payloads
    ✅ ObjectId references, email format, phone digits
    ✅ JSON booleans are not numbers (numberInStock, dailyRentalRate)
"""

import pytest
from bson import ObjectId

from vidly.exceptions import ValidationError
from vidly.schemas.genre import GenreIn
from vidly.schemas.movie import MovieIn
from vidly.validation import (
    format_error,
    parse_payload,
    validate_credentials,
    validate_customer,
    validate_genre,
    validate_movie,
    validate_rental,
    validate_return,
    validate_user,
)


def _movie(**overrides):
    payload = {
        "title": "Terminator",
        "genreId": str(ObjectId()),
        "numberInStock": 10,
        "dailyRentalRate": 2,
    }
    payload.update(overrides)
    return payload


class TestGenreValidation:

    def test_valid_genre(self):
        assert validate_genre({"name": "Drama"}) == (True, None)

    @pytest.mark.parametrize("name", ["12345", "a" * 50])
    def test_name_bounds_are_inclusive(self, name):
        assert validate_genre({"name": name})[0] is True

    def test_name_too_short(self):
        ok, message = validate_genre({"name": "1234"})
        assert ok is False
        assert message == '"name" length must be at least 5 characters long'

    def test_name_too_long(self):
        ok, message = validate_genre({"name": "a" * 51})
        assert ok is False
        assert message == '"name" length must be less than or equal to 50 characters long'

    def test_name_missing(self):
        assert validate_genre({}) == (False, '"name" is required')

    def test_name_wrong_type(self):
        assert validate_genre({"name": 12345}) == (False, '"name" must be a string')

    def test_unknown_key_rejected(self):
        ok, message = validate_genre({"name": "Drama", "rating": 5})
        assert ok is False
        assert message == '"rating" is not allowed'

    def test_payload_not_an_object(self):
        ok, message = validate_genre(None)
        assert ok is False
        assert message == '"value" must be an object'


class TestMovieValidation:

    def test_valid_movie(self):
        assert validate_movie(_movie()) == (True, None)

    def test_zero_stock_and_rate_allowed(self):
        assert validate_movie(_movie(numberInStock=0, dailyRentalRate=0))[0] is True

    def test_upper_bounds(self):
        assert validate_movie(_movie(numberInStock=255, dailyRentalRate=255))[0] is True
        assert validate_movie(_movie(numberInStock=256)) == (
            False, '"numberInStock" must be less than or equal to 255'
        )

    def test_negative_stock(self):
        assert validate_movie(_movie(numberInStock=-1)) == (
            False, '"numberInStock" must be greater than or equal to 0'
        )

    def test_fractional_stock_rejected(self):
        assert validate_movie(_movie(numberInStock=1.5)) == (
            False, '"numberInStock" must be an integer'
        )

    def test_boolean_stock_rejected(self):
        assert validate_movie(_movie(numberInStock=True)) == (
            False, '"numberInStock" must be an integer'
        )

    def test_boolean_rate_rejected(self):
        assert validate_movie(_movie(dailyRentalRate=True)) == (
            False, '"dailyRentalRate" must be a number'
        )

    def test_invalid_genre_id(self):
        assert validate_movie(_movie(genreId="1")) == (False, '"genreId" must be a valid ID')

    def test_first_error_wins(self):
        """title is declared before genreId, so its error is the one reported."""
        ok, message = validate_movie(_movie(title="abc", genreId="nope"))
        assert ok is False
        assert message.startswith('"title"')

    def test_snake_case_keys_not_accepted(self):
        payload = _movie()
        payload["number_in_stock"] = payload.pop("numberInStock")
        ok, message = validate_movie(payload)
        assert ok is False
        assert message == '"numberInStock" is required'


class TestCustomerValidation:

    def test_valid_customer(self):
        assert validate_customer({"name": "Jane Doe", "phone": "5551234"}) == (True, None)

    def test_numeric_phone_accepted(self):
        assert validate_customer({"name": "Jane Doe", "phone": 5551234})[0] is True

    def test_phone_must_be_digits(self):
        ok, message = validate_customer({"name": "Jane Doe", "phone": "555-1234"})
        assert ok is False
        assert message == '"phone" must contain only digits'

    def test_phone_too_short(self):
        ok, message = validate_customer({"name": "Jane Doe", "phone": "123"})
        assert ok is False
        assert message == '"phone" length must be at least 5 characters long'

    def test_is_gold_must_be_boolean(self):
        ok, message = validate_customer({"name": "Jane Doe", "isGold": "yes", "phone": "55512"})
        assert ok is False
        assert message == '"isGold" must be a boolean'


class TestRentalValidation:

    def test_valid_rental(self):
        payload = {"customerId": str(ObjectId()), "movieId": str(ObjectId())}
        assert validate_rental(payload) == (True, None)
        assert validate_return(payload) == (True, None)

    def test_missing_movie(self):
        assert validate_rental({"customerId": str(ObjectId())}) == (False, '"movieId" is required')

    def test_malformed_customer(self):
        ok, message = validate_return({"customerId": "abc", "movieId": str(ObjectId())})
        assert ok is False
        assert message == '"customerId" must be a valid ID'


class TestUserValidation:

    def test_valid_user(self):
        payload = {"name": "Jane", "email": "jane@vidly.com", "password": "12345"}
        assert validate_user(payload) == (True, None)

    def test_invalid_email(self):
        payload = {"name": "Jane", "email": "not-an-email", "password": "12345"}
        assert validate_user(payload) == (False, '"email" must be a valid email')

    def test_short_password(self):
        payload = {"name": "Jane", "email": "jane@vidly.com", "password": "1234"}
        assert validate_user(payload) == (
            False, '"password" length must be at least 5 characters long'
        )

    def test_credentials_reject_name(self):
        payload = {"name": "Jane", "email": "jane@vidly.com", "password": "12345"}
        assert validate_credentials(payload) == (False, '"name" is not allowed')


class TestParsePayload:

    def test_returns_typed_model(self):
        genre = parse_payload(GenreIn, {"name": "Comedy"})
        assert genre.name == "Comedy"

    def test_raises_with_first_message(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_payload(GenreIn, {"name": "abc"})
        assert exc_info.value.message == '"name" length must be at least 5 characters long'

    def test_agrees_with_entity_validator(self):
        payload = {"title": "Terminator", "genreId": str(ObjectId()),
                   "numberInStock": False, "dailyRentalRate": 2}
        ok, message = validate_movie(payload)

        with pytest.raises(ValidationError) as exc_info:
            parse_payload(MovieIn, payload)

        assert ok is False
        assert exc_info.value.message == message

    def test_unknown_error_type_falls_back_to_pydantic_text(self):
        error = {"type": "something_new", "loc": ("field",), "msg": "is odd"}
        assert format_error(error) == '"field" is odd'
