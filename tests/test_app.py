from app.core.logging import build_logging_config
from app.middleware.request_logging import PROCESS_TIME_HEADER
from app.utils.response import flash_redirect


async def test_health_check(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert PROCESS_TIME_HEADER in response.headers


async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/no-such-page")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Not Found",
        "error_code": "NOT_FOUND",
        "details": None,
    }


async def test_query_validation_reports_field_errors(client):
    response = await client.get("/quotations/", params={"page": 0})

    assert response.status_code == 422
    assert list(response.json()["details"]["field_errors"]) == ["page"]


def test_flash_redirect_encodes_message():
    assert flash_redirect("/quotations", "Saved & done!") == (
        "/quotations?success=Saved+%26+done%21"
    )


def test_logging_config_levels():
    config = build_logging_config("WARNING")

    assert config["root"]["level"] == "WARNING"
    assert config["loggers"]["app.services.quotations"]["level"] == "WARNING"
    assert config["loggers"]["access"]["propagate"] is False
