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
Ordering of Kubernetes API versions

Kubernetes versions look like v<major>[(alpha|beta)<minor>]. The ordering
implemented here ranks them from least to most preferred:

    v1alpha1 < v1alpha3 < v1beta1 < v1beta2 < v1 < v2alpha1 < v2beta1 < v2

That is, the major number dominates, then the stability tier (GA beats beta
beats alpha), then the number following the tier. Strings that aren't
versions at all sort below every real version.
"""
from functools import cmp_to_key
from typing import Any, Optional, Tuple, Union

from kubegen.naming import version_regexp

# stability tier ranks; GA is a version without an alpha/beta suffix
_tier_rank = {"alpha": 0,
              "beta": 1,
              None: 2}


def version_sort_key(version: Optional[str]) -> Tuple:
    """
    Returns a tuple that sorts in the same order as compare_api_versions()

    :param version: a version string such as 'v1beta2'; may be None or
        some non-version string
    :return: a tuple key; non-versions yield (0, <string>), versions yield
        (1, major, tier rank, minor)
    """
    m = version_regexp.match(version) if version else None
    if m is None:
        return 0, version or ""
    minor = m.group("minor")
    return (1,
            int(m.group("major")),
            _tier_rank[m.group("tier")],
            int(minor) if minor else 0)


def _version_of(item: Any) -> Optional[str]:
    if item is None or isinstance(item, str):
        return item
    return item.version


def compare_api_versions(lhs: Union[str, Any], rhs: Union[str, Any]) -> int:
    """
    Compare the versions of two definitions (or two version strings)

    :param lhs: a version string or anything with a 'version' attribute, such as
        an ApiTypeName or ApiObjectDefinition
    :param rhs: same as lhs
    :return: negative if lhs is less preferred than rhs, positive if more
        preferred, and 0 if they are the same version
    """
    lkey = version_sort_key(_version_of(lhs))
    rkey = version_sort_key(_version_of(rhs))
    if lkey < rkey:
        return -1
    if lkey > rkey:
        return 1
    return 0


api_version_key = cmp_to_key(compare_api_versions)
