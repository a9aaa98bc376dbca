"""Tests for the lazy top-level public API."""

import pytest

import apirouter


class TestLazyImports:
    @pytest.mark.parametrize("name", apirouter.__all__)
    def test_every_public_name_resolves(self, name: str) -> None:
        assert getattr(apirouter, name) is not None

    def test_router_is_router_class(self) -> None:
        from apirouter.router import Router

        assert apirouter.Router is Router

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError, match="no attribute 'Nope'"):
            apirouter.Nope  # noqa: B018

    def test_version(self) -> None:
        assert apirouter.__version__ == "0.1.0"
