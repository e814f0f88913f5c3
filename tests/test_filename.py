"""Tests for the filename template resolver."""

from screencompare.compare.filename import camel_case, format_file_name
from screencompare.models.geometry import EnvironmentProfile


def _profile(**overrides) -> EnvironmentProfile:
    data = {
        "browser_name": "chrome",
        "device_name": "",
        "device_pixel_ratio": 2,
        "browser_width": 1366,
        "browser_height": 768,
        "name": "Desktop run",
        "log_name": "Chrome latest - Desktop",
    }
    data.update(overrides)
    return EnvironmentProfile(**data)


class TestFormatFileName:
    def test_default_template(self):
        assert format_file_name("login", _profile()) == "login-chrome-1366x768-dpr-2.png"

    def test_same_inputs_same_name(self):
        profile = _profile()
        assert format_file_name("home", profile) == format_file_name("home", profile)

    def test_fractional_dpr(self):
        assert format_file_name("x", _profile(device_pixel_ratio=1.5)).endswith("-dpr-1.5.png")

    def test_all_tokens(self):
        name = format_file_name(
            "tag",
            _profile(device_name="iphone x"),
            "{tag}_{browserName}_{deviceName}_{dpr}_{height}_{width}_{logName}_{name}",
        )
        assert name == "tag_chrome_iphone x_2_768_1366_chromeLatestDesktop_Desktop run.png"

    def test_unknown_tokens_left_verbatim(self):
        assert format_file_name("a", _profile(), "{tag}-{unknown}") == "a-{unknown}.png"

    def test_only_first_occurrence_replaced(self):
        assert format_file_name("a", _profile(), "{tag}-{tag}") == "a-{tag}.png"

    def test_format_options_override_known_tokens(self):
        name = format_file_name(
            "a",
            _profile(),
            "{tag}-{browserName}-{custom}",
            format_options={"browserName": "chromium", "custom": "ignored"},
        )
        assert name == "a-chromium-{custom}.png"


class TestCamelCase:
    def test_words(self):
        assert camel_case("Chrome latest - Desktop") == "chromeLatestDesktop"

    def test_empty(self):
        assert camel_case("") == ""
        assert camel_case(" - ") == ""
