import pytest

from app.services.usage_format import (
    DISABLED,
    UNLIMITED,
    bytes_human,
    format_usage,
    limit_message,
    mib_to_bytes,
    translate_limit,
)


@pytest.mark.parametrize("used", [0, 1, 1023, 1048576, 5 * 1024 ** 4])
def test_zero_limit_is_unlimited(used):
    usage = format_usage(used, 0)
    assert usage.percent is None
    assert usage.display_text.endswith("/ ∞")
    assert usage.display_text.startswith(bytes_human(used))


def test_percent_bounds_and_over_quota():
    limit = 10 * 1048576
    assert format_usage(0, limit).percent == 0
    assert format_usage(limit, limit).percent == 100
    # over quota is not clamped
    assert format_usage(2 * limit, limit).percent == 200


def test_percent_rounds_half_up():
    assert format_usage(1, 200).percent == 1
    assert format_usage(1, 201).percent == 0
    assert format_usage(2, 3).percent == 67


def test_display_text_with_limit():
    assert format_usage(1048576, 2 * 1048576).display_text == "1.00 MiB / 2.00 MiB"


def test_negative_values_rejected():
    with pytest.raises(ValueError):
        format_usage(-1, 10)
    with pytest.raises(ValueError):
        bytes_human(-5)


def test_bytes_human_binary_units():
    assert bytes_human(0) == "0.00 B"
    assert bytes_human(1023) == "1023.00 B"
    assert bytes_human(1024) == "1.00 KiB"
    assert bytes_human(1536) == "1.50 KiB"
    assert bytes_human(1048576) == "1.00 MiB"
    assert bytes_human(3 * 1024 ** 3) == "3.00 GiB"
    assert bytes_human(1024 ** 4) == "1.00 TiB"


def test_translate_limit():
    assert translate_limit(0) == UNLIMITED == "∞"
    assert translate_limit(5) == "5"
    assert translate_limit(-1) == DISABLED
    assert translate_limit(-1) not in ("∞", "-1")


def test_limit_message():
    assert limit_message(3, 10) == "3 / 10"
    assert limit_message(4, 0) == "4 / ∞"
    assert limit_message(0, -1) == "0 / Disabled"


def test_mebibyte_conversion_is_binary():
    assert mib_to_bytes(1) == 1048576
    assert mib_to_bytes(0) == 0


def test_bytes_human_steps_up_when_rounding_reaches_1024():
    assert bytes_human(1048575) == "1.00 MiB"
    assert bytes_human(1024 ** 3 - 1) == "1.00 GiB"
    assert bytes_human(1023 * 1024) == "1023.00 KiB"
