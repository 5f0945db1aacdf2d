from __future__ import annotations

import pytest

from api.errors import ApiError
from api.main import create_app
from tests.unit._api_test_client import make_client


@pytest.mark.anyio
async def test_api_error_handler_json_shape(test_config):
    app = create_app(test_config)

    @app.get("/_test/error")
    def _raise() -> None:
        raise ApiError(code="test.error", message="boom", status=418, detail="extra")

    async with make_client(app) as ac:
        r = await ac.get("/_test/error")
        assert r.status_code == 418
        assert r.json() == {"error": {"code": "test.error", "message": "boom", "detail": "extra"}}
