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
Runtime support for the generated modules

Code produced by kubegen consists of dataclasses derived from the two base
classes in this module: KubeStruct for nested data types and ApiObject for
the top-level objects that can appear in a manifest. The base classes know
how to turn an instance into a minimal dict (no None values or empty
containers), YAML, or JSON.

This module also holds the exceptions kubegen raises.
"""
import json
from dataclasses import fields, is_dataclass
from io import StringIO
from typing import Any, Dict, Tuple

from ruamel.yaml import YAML

from kubegen.naming import make_api_version


class KubegenException(Exception):
    pass


class ApiObjectNameError(KubegenException):
    pass


class AmbiguousGroupVersionKindError(KubegenException):
    pass


class IncludeConflictError(KubegenException):
    pass


class SchemaFetchError(KubegenException):
    pass


class ImportSpecError(KubegenException):
    pass


def _clean_value(v: Any) -> Any:
    if isinstance(v, KubeStruct):
        return v.to_dict()
    if isinstance(v, dict):
        return {k: _clean_value(i) for k, i in v.items() if i is not None}
    if isinstance(v, (list, tuple)):
        return [_clean_value(i) for i in v]
    return v


class KubeStruct(object):
    """
    Base class for all generated data types

    Derived classes are dataclasses. If any attribute name had to be changed
    to make it a legal Python identifier, the derived class maps the Python
    name to the original JSON name in the _renames class attribute.
    """
    _renames: Dict[str, str] = {}

    def to_dict(self) -> dict:
        """
        Returns a dict of this object without any None values or empty containers
        """
        if not is_dataclass(self):
            raise TypeError(f"{self.__class__.__name__} is not a dataclass")
        clean = {}
        for f in fields(self):
            v = _clean_value(getattr(self, f.name))
            if v is None:
                continue
            if isinstance(v, (list, dict)) and not v:  # this is an empty container
                continue
            clean[self._renames.get(f.name, f.name)] = v
        return clean


class ApiObject(KubeStruct):
    """
    Base class for the generated top-level API objects

    Each derived class names the group, version, and kind it was generated for
    in the _group, _version, and _kind class attributes; these are used to
    produce the apiVersion and kind values of the manifest.
    """
    _group: str = ""
    _version: str = ""
    _kind: str = ""

    @classmethod
    def api_version(cls) -> str:
        return make_api_version(cls._group, cls._version)

    @classmethod
    def gvk(cls) -> Tuple[str, str, str]:
        return cls._group, cls._version, cls._kind

    def to_dict(self) -> dict:
        d = {"apiVersion": self.api_version(),
             "kind": self._kind}
        d.update(super(ApiObject, self).to_dict())
        return d


def get_clean_dict(obj: KubeStruct) -> dict:
    """
    Turns an instance of a KubeStruct into a dict without values of None

    :param obj: an instance of some KubeStruct subclass
    :return: a dict representation of obj; keys whose values are None or empty
        containers are left out. ApiObjects also get apiVersion and kind.
    :raises TypeError: if obj is not a KubeStruct
    """
    if not isinstance(obj, KubeStruct):
        raise TypeError("obj must be a kind of KubeStruct")
    return obj.to_dict()


def get_yaml(obj: KubeStruct) -> str:
    """
    Creates a YAML representation of a KubeStruct

    :param obj: instance of some KubeStruct subclass
    :return: a YAML document, starting with '---'
    :raises TypeError: if obj isn't a KubeStruct
    """
    d: dict = get_clean_dict(obj)
    yaml = YAML(typ="safe")
    yaml.indent(offset=2, sequence=4)
    sio = StringIO()
    yaml.dump(d, sio)
    return "\n".join(["---", sio.getvalue()])


def get_json(obj: KubeStruct) -> str:
    """
    Creates a JSON representation of a KubeStruct

    :param obj: instance of some KubeStruct subclass
    :return: string of JSON
    :raises TypeError: if obj isn't a KubeStruct
    """
    d = get_clean_dict(obj)
    return json.dumps(d)
