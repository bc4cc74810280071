import pytest

from packages.rsvp.models.domain.enums import ColorCode, ResponseStatus, color_code_for


class TestColorCode:
    @pytest.mark.parametrize(
        "status, expected",
        [
            (ResponseStatus.ACCEPTED, ColorCode.GREEN),
            (ResponseStatus.DECLINED, ColorCode.YELLOW),
            (ResponseStatus.PENDING, ColorCode.GREY),
            (None, ColorCode.GREY),
        ],
    )
    def test_color_for_status(self, status, expected):
        assert color_code_for(status) == expected

    def test_plain_strings_match(self):
        assert color_code_for("accepted") == ColorCode.GREEN
        assert color_code_for("declined") == ColorCode.YELLOW

    def test_hex_values(self):
        assert ColorCode.GREEN.hex == "#28a745"
        assert ColorCode.YELLOW.hex == "#ffc107"
        assert ColorCode.GREY.hex == "#6c757d"

    def test_status_labels(self):
        assert ResponseStatus.ACCEPTED.label == "Attending"
        assert ResponseStatus.DECLINED.label == "Not Attending"
        assert ResponseStatus.PENDING.label == "Pending Response"
