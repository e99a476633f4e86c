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
"""
Getting hold of a Kubernetes schema document

The schema can be downloaded for a given Kubernetes version or read from a
local file. Either way the result is the decoded JSON document; anything that
goes wrong is raised as a SchemaFetchError and nothing is retried.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from kubegen.meta import SchemaFetchError

logger = logging.getLogger(__name__)

default_url_template = ("https://raw.githubusercontent.com/instrumenta/"
                        "kubernetes-json-schema/master/v{api_version}/_definitions.json")


def schema_url(api_version: str, url_template: Optional[str] = None) -> str:
    template = url_template if url_template is not None else default_url_template
    return template.format(api_version=api_version)


def decode_schema(text: Union[str, bytes], source: str = "schema") -> Dict[str, Any]:
    """
    Decode the text of a schema document and check that it has definitions

    :param text: JSON text
    :param source: where the text came from, for error messages
    :return: the decoded document
    :raises SchemaFetchError: if the text isn't JSON or has no definitions map
    """
    try:
        doc = json.loads(text)
    except ValueError as e:
        raise SchemaFetchError(f"{source} is not valid JSON: {e}") from e
    if not isinstance(doc, dict) or not isinstance(doc.get("definitions"), dict):
        raise SchemaFetchError(f"{source} does not contain a 'definitions' map")
    return doc


def download(url: str, client: Optional[httpx.Client] = None,
             timeout: float = 60.0) -> str:
    """
    Fetch the text at url

    :param url: what to fetch
    :param client: optional httpx.Client to use; if not supplied a new one
        is created and closed for this call
    :param timeout: seconds to wait, only used when creating a client
    :return: the body of the response as text
    :raises SchemaFetchError: on any transport error or non-2xx response
    """
    logger.info("Downloading %s", url)
    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        response = client.get(url)
        response.raise_for_status()
        return response.text
    except httpx.HTTPStatusError as e:
        raise SchemaFetchError(f"Failed to download {url}: HTTP "
                               f"{e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise SchemaFetchError(f"Failed to download {url}: {e}") from e
    finally:
        if own_client:
            client.close()


def download_schema(api_version: str, url_template: Optional[str] = None,
                    client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """
    Download and decode the schema for a Kubernetes version

    :param api_version: Kubernetes version, such as '1.15.0'
    :param url_template: optional format string with an {api_version} field;
        defaults to the instrumenta kubernetes-json-schema repository
    :param client: optional httpx.Client
    :return: the decoded schema document
    :raises SchemaFetchError: if the download fails or the document is bad
    """
    url = schema_url(api_version, url_template)
    return decode_schema(download(url, client=client), source=url)


def load_schema(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read and decode a schema document from a local file

    :raises SchemaFetchError: if the file can't be read or decoded
    """
    p = Path(path)
    try:
        text = p.read_text()
    except OSError as e:
        raise SchemaFetchError(f"Can't read schema file {p}: {e}") from e
    return decode_schema(text, source=str(p))
