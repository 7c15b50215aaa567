import pytest

from cuisine.errors import AppError, BadRequest, DatabaseError, NotFound


def test_not_found_body_and_status():
    err = NotFound()
    assert err.status_code == 404
    assert err.to_dict() == {"error": "not found"}
    assert str(err) == "not found"


def test_bad_request_body_is_bare_detail():
    err = BadRequest("missing field `french`")
    assert err.status_code == 400
    assert err.to_dict() == {"error": "missing field `french`"}
    assert str(err) == "bad request: missing field `french`"


def test_database_error_body_includes_prefix():
    err = DatabaseError("disk I/O error")
    assert err.status_code == 500
    assert err.to_dict() == {"error": "database error: disk I/O error"}


@pytest.mark.parametrize("err", [NotFound(), BadRequest("x"), DatabaseError("y")])
def test_all_errors_are_catchable_as_app_error(err):
    with pytest.raises(AppError) as info:
        raise err
    assert info.value.to_dict()["error"] == err.body_message