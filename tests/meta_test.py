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
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest
from ruamel.yaml import YAML

from kubegen.meta import ApiObject, KubeStruct, get_clean_dict, get_yaml, get_json


@dataclass
class Port(KubeStruct):
    containerPort: int
    protocol: Optional[str] = None


@dataclass
class Meta(KubeStruct):
    _renames = {"continue_": "continue"}

    name: Optional[str] = None
    continue_: Optional[str] = None
    labels: Optional[Dict[str, str]] = field(default_factory=dict)


@dataclass
class Widget(ApiObject):
    _group = "example.io"
    _version = "v1alpha1"
    _kind = "Widget"

    metadata: Optional[Meta] = None
    ports: Optional[List[Port]] = field(default_factory=list)


def test01():
    """
    None values and empty containers are left out
    """
    assert Meta(name="x").to_dict() == {"name": "x"}
    assert Meta().to_dict() == {}


def test02():
    """
    renamed attributes use their original names
    """
    assert Meta(continue_="abc").to_dict() == {"continue": "abc"}


def test03():
    """
    ApiObjects include apiVersion and kind
    """
    w = Widget(metadata=Meta(name="w1", labels={"a": "b"}),
               ports=[Port(containerPort=80), Port(8443, "TCP")])
    assert Widget.api_version() == "example.io/v1alpha1"
    assert Widget.gvk() == ("example.io", "v1alpha1", "Widget")
    assert get_clean_dict(w) == {"apiVersion": "example.io/v1alpha1",
                                 "kind": "Widget",
                                 "metadata": {"name": "w1", "labels": {"a": "b"}},
                                 "ports": [{"containerPort": 80},
                                           {"containerPort": 8443,
                                            "protocol": "TCP"}]}


def test04():
    """
    nested objects that end up empty are left out
    """
    w = Widget(metadata=Meta())
    assert w.to_dict() == {"apiVersion": "example.io/v1alpha1", "kind": "Widget"}


def test05():
    """
    YAML output can be loaded back
    """
    w = Widget(metadata=Meta(name="w1"))
    text = get_yaml(w)
    assert text.startswith("---\n")
    docs = list(YAML(typ="safe").load_all(text))
    assert docs[0] == w.to_dict()


def test06():
    """
    JSON output
    """
    w = Widget(metadata=Meta(name="w1"))
    assert json.loads(get_json(w)) == w.to_dict()


def test07():
    """
    only KubeStructs can be cleaned
    """
    with pytest.raises(TypeError):
        get_clean_dict({"a": 1})
    with pytest.raises(TypeError):
        get_yaml("nope")
