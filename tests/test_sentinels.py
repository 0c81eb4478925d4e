#
# abbrev_num - Sentinels Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import pickle

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from abbrev_num.sentinels import UNSET, UnsetType, ifnotunset


# Tests ----------------------------------------------------------------------------------------------------------------

class TestUnset:

    def test_singleton(self):
        assert UnsetType() is UNSET
        assert pickle.loads(pickle.dumps(UNSET)) is UNSET

    def test_falsy_and_repr(self):
        assert not UNSET
        assert repr(UNSET) == "<UNSET>"

    def test_distinct_from_none(self):
        assert UNSET is not None
        assert UNSET != None  # noqa: E711


class TestIfNotUnset:

    @pytest.mark.parametrize(
        "value, default, expected",
        [
            pytest.param(UNSET, 30, 30, id="unset"),
            pytest.param(60, 30, 60, id="set"),
            pytest.param(None, 30, None, id="none-is-a-value"),
            pytest.param(0, 30, 0, id="falsy-is-a-value"),
        ],
    )
    def test_ifnotunset(self, value, default, expected):
        assert ifnotunset(value, default=default) == expected
