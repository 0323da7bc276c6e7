"""Tests for the installed package layout."""

import pagespeed_proxy
from pagespeed_proxy import api, audit, core


def test_subpackages_are_regular_packages() -> None:
    for package in (api, audit, core):
        assert package.__file__ is not None
        assert package.__file__.endswith("__init__.py")


def test_version() -> None:
    assert pagespeed_proxy.__version__ == "1.0.0"
