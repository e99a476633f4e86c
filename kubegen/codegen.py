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
Emits the wrapper class for a single selected API object
"""
from typing import Any, Mapping

from kubegen.naming import class_name_for
from kubegen.typegen import TypeGenerator

# properties the ApiObject base supplies itself, or that only the server sets
_managed_properties = ("apiVersion", "kind", "status")


def construct_class_name(kind: str) -> str:
    return f"Kube{class_name_for(kind)}"


def generate_construct(typegen: TypeGenerator, fqn: str, group: str, kind: str,
                       version: str, schema: Mapping[str, Any]) -> str:
    """
    Emit the ApiObject subclass for one API object into a TypeGenerator

    The class is named Kube<kind> and has all the properties of the schema except
    apiVersion, kind, and status; the GVK is recorded in the class attributes
    _group, _version, and _kind.

    :param typegen: the TypeGenerator to emit into; any data types the object
        refers to are emitted as well
    :param fqn: full definition name of the object
    :param group: GVK group
    :param kind: GVK kind
    :param version: GVK version
    :param schema: the object's schema
    :return: the name of the emitted class
    """
    copy = dict(schema)
    props = {k: v for k, v in (schema.get("properties") or {}).items()
             if k not in _managed_properties}
    copy["properties"] = props
    copy["required"] = [r for r in schema.get("required", []) if r in props]
    return typegen.emit_custom_type(fqn, copy, key=f"{fqn}#construct",
                                    name=construct_class_name(kind),
                                    base="ApiObject",
                                    class_attrs={"_group": group,
                                                 "_version": version,
                                                 "_kind": kind})
