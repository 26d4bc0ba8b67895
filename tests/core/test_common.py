from __future__ import annotations

import pytest

import negboa
from negboa import BOAParameter, ResponseType
from negboa.warnings import NegboaUnexpectedValueWarning, NegboaWarning, warn


def test_parameter_attribute_defaults_to_its_name():
    assert BOAParameter("e", 1.0).attribute == "e"
    p = BOAParameter("minUtility", 0.5, "Minimum utility", "min_utility")
    assert p.attribute == "min_utility"
    assert p.description == "Minimum utility"


def test_responses():
    assert ResponseType.ACCEPT_OFFER != ResponseType.REJECT_OFFER
    assert ResponseType["REJECT_OFFER"] == ResponseType.REJECT_OFFER


def test_warnings():
    with pytest.warns(NegboaWarning):
        warn("something odd")
    with pytest.warns(NegboaUnexpectedValueWarning):
        warn("unknown value", NegboaUnexpectedValueWarning)
    assert issubclass(NegboaUnexpectedValueWarning, UserWarning)


def test_public_names_are_exported():
    for name in negboa.__all__:
        assert hasattr(negboa, name), name
    assert negboa.__version__
