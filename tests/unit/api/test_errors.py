from __future__ import annotations

import importlib
import sys
import warnings

import pytest

import faceclaimer.api as api_package
from faceclaimer.api.errors import ApiError
from faceclaimer.exceptions import DecodeError, FetchError, NotFoundError

pytestmark = pytest.mark.unit


def test_errors_module_imports_without_warnings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(api_package, "errors", api_package.errors)
    monkeypatch.delitem(sys.modules, "faceclaimer.api.errors")

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        module = importlib.import_module("faceclaimer.api.errors")

    assert module.ApiError.from_domain(DecodeError("bad image")).status_code == 422


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (DecodeError("bad image"), 422),
        (FetchError("timed out"), 502),
        (NotFoundError("Image not found"), 400),
    ],
)
def test_from_domain_maps_status(exc: Exception, expected: int) -> None:
    error = ApiError.from_domain(exc)
    assert error.status_code == expected
    assert error.message == str(exc)
