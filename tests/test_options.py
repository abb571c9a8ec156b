"""Tests for query parameter options."""

from urllib.parse import urlencode

import pytest

from reverseip.options import Option, apply_options, from_domain, output_format


class TestOptions:
    @pytest.mark.parametrize(
        "option, wanted",
        [
            (output_format("JSON"), "outputFormat=JSON"),
            (output_format("xml"), "outputFormat=XML"),
            (from_domain("test.com"), "from=test.com"),
        ],
    )
    def test_sets_parameter(self, option, wanted):
        params = {}
        option(params)

        assert urlencode(params) == wanted

    def test_option_is_a_named_entry(self):
        assert from_domain("a.com") == Option("from", "a.com")

    def test_reapplying_is_idempotent(self):
        params = {}
        option = from_domain("a.com")

        option.apply(params)
        option.apply(params)

        assert params == {"from": "a.com"}


class TestApplyOptions:
    def test_last_write_wins(self):
        params = apply_options({}, [from_domain("a.com"), from_domain("b.com")])

        assert params == {"from": "b.com"}

    def test_overwrites_existing_values(self):
        params = apply_options({"outputFormat": "XML"}, [output_format("json")])

        assert params == {"outputFormat": "JSON"}

    def test_distinct_keys_commute(self):
        options = [output_format("XML"), from_domain("a.com")]

        assert apply_options({}, options) == apply_options({}, list(reversed(options)))

    def test_returns_same_mapping(self):
        params = {"ip": "8.8.8.8"}

        assert apply_options(params, []) is params
