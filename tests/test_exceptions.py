"""
Tests for the error taxonomy
"""

import pytest

from usersvc.exceptions import DuplicateEmailError, UserNotFoundError, UserServiceException


class TestExceptions:
    def test_base_exception_defaults(self):
        error = UserServiceException("Something broke")

        assert str(error) == "Something broke"
        assert error.status_code == 500
        assert error.details == {}

    def test_duplicate_email(self):
        error = DuplicateEmailError("a@x.com")

        assert isinstance(error, UserServiceException)
        assert error.status_code == 400
        assert error.message == "Email already taken"
        assert error.details == {"email": "a@x.com"}

    def test_user_not_found(self):
        error = UserNotFoundError(7)

        assert error.status_code == 404
        assert error.message == "User not found"
        assert error.details == {"user_id": 7}
        assert UserNotFoundError().details == {}

    def test_catchable_as_base(self):
        with pytest.raises(UserServiceException):
            raise UserNotFoundError(1)
