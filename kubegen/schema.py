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
A structural view of a single JSON-Schema definition

Raw definitions are plain dicts decoded from JSON. SchemaDefinition gives the
rest of kubegen a fixed set of questions it can ask of one (does it carry GVK
annotations, what properties does it declare, what does it reference) so that
no other module needs to probe the dict directly.
"""
from typing import Any, Dict, List, Mapping, Optional

from kubegen.naming import full_swagger_name

X_GROUP_VERSION_KIND = 'x-kubernetes-group-version-kind'


class SchemaDefinition(object):
    def __init__(self, d: Optional[Mapping[str, Any]]):
        self.raw = d if d is not None else {}

    @property
    def group_version_kinds(self) -> List[Dict[str, str]]:
        gvks = self.raw.get(X_GROUP_VERSION_KIND)
        if not isinstance(gvks, list):
            return []
        return [g for g in gvks if isinstance(g, Mapping)]

    def has_group_version_kind(self) -> bool:
        return len(self.group_version_kinds) > 0

    @property
    def properties(self) -> Mapping[str, Any]:
        props = self.raw.get("properties")
        return props if isinstance(props, Mapping) else {}

    def has_property(self, name: str) -> bool:
        return self.properties.get(name) is not None

    @property
    def required(self) -> List[str]:
        return list(self.raw.get("required", []))

    @property
    def description(self) -> Optional[str]:
        return self.raw.get("description")

    @property
    def type(self) -> Optional[str]:
        """
        The JSON-Schema type; for a list of types, the first one that isn't 'null'
        """
        t = self.raw.get("type")
        if isinstance(t, list):
            return next((i for i in t if i != "null"), None)
        return t

    @property
    def format(self) -> Optional[str]:
        return self.raw.get("format")

    @property
    def ref(self) -> Optional[str]:
        """
        The name of the definition this schema refers to, if it is a $ref
        """
        ref = self.raw.get("$ref")
        return full_swagger_name(ref) if ref else None

    def has_properties(self) -> bool:
        """
        False for definitions that don't describe an object with properties

        These are things like IntOrString, Quantity, or RawExtension that are
        really a scalar or free-form value; they don't get classes of their own.
        """
        return len(self.properties) > 0


def get_definitions(schema: Mapping[str, Any]) -> Mapping[str, Any]:
    """
    Return the definitions map from either a whole schema document or the map itself

    A document that has a 'definitions' key yields its value; otherwise the
    document is assumed to already be a definitions map.
    """
    defs = schema.get("definitions")
    if isinstance(defs, Mapping):
        return defs
    return schema
