import httpx

from dnslookup.api.options import apply_options, callback, output_format, record_type


class TestOptions:
    def test_options_do_not_mutate(self):
        params = httpx.QueryParams({"type": "_all"})
        updated = record_type("a,mx")(params)

        assert params["type"] == "_all"
        assert updated["type"] == "A,MX"

    def test_output_format_upper_cased(self):
        assert output_format("xml")(httpx.QueryParams())["outputFormat"] == "XML"

    def test_callback(self):
        assert callback("handle")(httpx.QueryParams())["callback"] == "handle"

    def test_later_options_win(self):
        params = apply_options(
            httpx.QueryParams(),
            [output_format("XML"), record_type("A"), output_format("JSON")],
        )

        assert params["outputFormat"] == "JSON"
        assert params["type"] == "A"
        assert len(params.get_list("outputFormat")) == 1
