#
# Copyright (c) 2021 Incisive Technology Ltd
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
import json

import httpx
import pytest

from kubegen.fetch import (download, download_schema, load_schema, decode_schema,
                           schema_url, default_url_template)
from kubegen.meta import SchemaFetchError

small_schema = {"definitions": {"io.example.v1.Thing": {"type": "object"}}}


def make_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test01():
    """
    the default url uses the version
    """
    url = schema_url("1.15.0")
    assert url == default_url_template.format(api_version="1.15.0")
    assert "/v1.15.0/_definitions.json" in url
    assert schema_url("1.20.0", "http://example.com/{api_version}.json") == \
        "http://example.com/1.20.0.json"


def test02():
    """
    download and decode a schema
    """
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json=small_schema)

    with make_client(handler) as client:
        doc = download_schema("1.15.0", url_template="http://schemas.test/{api_version}",
                              client=client)
    assert doc == small_schema
    assert requested == ["http://schemas.test/1.15.0"]


def test03():
    """
    HTTP errors are SchemaFetchErrors
    """
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    with make_client(handler) as client:
        with pytest.raises(SchemaFetchError) as e:
            download("http://schemas.test/missing", client=client)
    assert "404" in str(e.value)


def test04():
    """
    transport errors are SchemaFetchErrors
    """
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(handler) as client:
        with pytest.raises(SchemaFetchError):
            download_schema("1.15.0", client=client)


def test05():
    """
    bad documents are rejected
    """
    with pytest.raises(SchemaFetchError):
        decode_schema("{not json")
    with pytest.raises(SchemaFetchError):
        decode_schema(json.dumps({"swagger": "2.0"}))
    with pytest.raises(SchemaFetchError):
        decode_schema(json.dumps([1, 2, 3]))
    assert decode_schema(json.dumps(small_schema)) == small_schema


def test06(tmp_path):
    """
    load a schema from a file
    """
    p = tmp_path / "schema.json"
    p.write_text(json.dumps(small_schema))
    assert load_schema(p) == small_schema
    assert load_schema(str(p)) == small_schema
    with pytest.raises(SchemaFetchError):
        load_schema(tmp_path / "nope.json")
