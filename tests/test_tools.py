#
# abbrev_num - Tools Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from abbrev_num.tools import fmt_type, fmt_value


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtType:

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(42, "<type: int>", id="instance"),
            pytest.param(int, "<type: int>", id="class"),
            pytest.param(ValueError("x"), "<type: ValueError>", id="exception"),
        ],
    )
    def test_fmt_type(self, obj, expected):
        assert fmt_type(obj) == expected


class TestFmtValue:

    def test_basic(self):
        assert fmt_value(42) == "<int: 42>"
        assert fmt_value("k") == "<str: 'k'>"

    def test_truncate(self):
        assert fmt_value("hello world", max_repr=8) == "<str: 'hello w...>"

    def test_escape_angle(self):
        assert fmt_value("a>b") == "<str: 'a\\>b'>"

    def test_broken_repr(self):
        class Broken:
            def __repr__(self):
                raise RuntimeError("boom")

        assert fmt_value(Broken()) == "<Broken: <Broken object (repr failed: RuntimeError)\\>>"
