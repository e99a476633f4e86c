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
Parsing of Kubernetes schema definition names

Definition names in a Kubernetes swagger/JSON-Schema document are dotted
strings such as 'io.k8s.api.apps.v1.Deployment'. The functions here break
these names apart into the group, version, and basename (kind) parts used to
group and rank the versions of each API object.
"""
import keyword
import re
from dataclasses import dataclass
from typing import Optional

# this is the prefix to use for attributes that otherwise start with '$'
dprefix = 'dollar_'

# names the annotations and defaults of a generated class body refer to; an
# attribute with one of these names would rebind it for the rest of the body
shadowed_names = frozenset(['int', 'str', 'float', 'bool', 'list', 'dict',
                            'Any', 'Dict', 'List', 'Optional', 'Union',
                            'dataclasses'])

version_regexp = re.compile(r'^v(?P<major>[0-9]+)'
                            r'(?:(?P<tier>alpha|beta)(?P<minor>[0-9]*))?$')


@dataclass(frozen=True)
class ApiTypeName:
    """
    The parsed identity of a schema definition name

    Attributes:
        basename: the name that follows the version segment, normally the kind
            of the object, such as 'Deployment'
        group: everything in front of the version segment, for example
            'io.k8s.api.apps'; may be empty
        version: the version segment, such as 'v1beta1', or None if the name
            has no version segment
        fullname: the definition name the other parts were parsed from
    """
    basename: str
    group: str
    version: Optional[str]
    fullname: str


def full_swagger_name(sname: str) -> str:
    """
    takes any full swagger name, either def or ref, and only returns the name part
    :param sname: string containing a swagger name for some object
    :return: a return with just the name, no other bits
    """
    base_parts = sname.split("/")
    return base_parts[-1]


def is_version_segment(segment: str) -> bool:
    """
    Says if a single name segment looks like a K8s API version (v1, v2beta1, ...)
    """
    return version_regexp.match(segment) is not None


def parse_api_type_name(sname: str) -> ApiTypeName:
    """
    Split a definition name into group, version, and basename

    The last segment of the name that looks like a version marks the split
    point; the segments after it are the basename and those before it are the
    group. Names without any version segment are not errors; they get a
    version of None, the last segment as basename, and the rest as group.

    :param sname: either the key of a definition or a $ref to one
    :return: an ApiTypeName
    """
    fullname = full_swagger_name(sname)
    parts = fullname.split(".")
    for i in range(len(parts) - 1, -1, -1):
        if is_version_segment(parts[i]):
            return ApiTypeName(basename=".".join(parts[i + 1:]),
                               group=".".join(parts[:i]),
                               version=parts[i],
                               fullname=fullname)
    return ApiTypeName(basename=parts[-1],
                       group=".".join(parts[:-1]),
                       version=None,
                       fullname=fullname)


def make_api_version(group: Optional[str], version: str) -> str:
    """
    Build the value of an apiVersion property from a GVK group and version

    :param group: the group from an x-kubernetes-group-version-kind entry; the
        core group is the empty string (or 'core')
    :param version: the version string, such as 'v1'
    :return: 'group/version', or just 'version' for the core group
    """
    if not group or group == "core":
        return version
    return f"{group}/{version}"


def python_attr_name(name: str) -> str:
    """
    Turn a JSON property name into a legal Python attribute name

    '-' becomes '_', Python keywords and the names in shadowed_names get a
    trailing '_', and a leading '$' is replaced with the dollar prefix.
    """
    name = name.replace('-', '_').replace('.', '_')
    if keyword.iskeyword(name) or name in shadowed_names:
        return f'{name}_'
    if name.startswith("$"):
        return f'{dprefix}{name.lstrip("$")}'
    return name


def class_name_for(basename: str) -> str:
    """
    Make a Python class name out of a definition's basename

    Basenames are usually already PascalCase, but some contain dots or dashes
    (e.g. nested CRD types); those are dropped and the following letter upper-cased.
    """
    parts = re.split(r'[^A-Za-z0-9]+', basename)
    name = "".join(p[:1].upper() + p[1:] for p in parts if p)
    if not name or name[0].isdigit():
        name = f"T{name}"
    return name
