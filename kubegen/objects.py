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
Discovery and version selection of Kubernetes API objects

A schema document defines many types, but only some of them are API objects:
types that can be the top-level entry of a manifest. These carry an
x-kubernetes-group-version-kind annotation and have a 'metadata' property.
The same kind is usually defined in several versions (Deployment exists in
apps/v1beta1, apps/v1beta2, and apps/v1, for instance); this module finds all
the API objects, groups them by kind, and picks exactly one version of each.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from kubegen.meta import (ApiObjectNameError, AmbiguousGroupVersionKindError,
                          IncludeConflictError)
from kubegen.naming import ApiTypeName, parse_api_type_name
from kubegen.schema import SchemaDefinition, X_GROUP_VERSION_KIND, get_definitions
from kubegen.versions import api_version_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupVersionKind:
    group: str
    version: str
    kind: str

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "GroupVersionKind":
        return cls(group=d.get("group", ""),
                   version=d.get("version", ""),
                   kind=d.get("kind", ""))


@dataclass(frozen=True)
class ApiObjectDefinition(ApiTypeName):
    schema: Mapping[str, Any] = field(default=None, hash=False)


ApiObjectDefinitions = Dict[str, List[ApiObjectDefinition]]


@dataclass
class ClassificationStats:
    """
    Tallies of what happened to each definition while building the index

    Definitions that aren't API objects are skipped without complaint; these
    counts are the only record of why.
    """
    seen: int = 0
    accepted: int = 0
    no_gvk: int = 0
    no_metadata: int = 0
    unversioned: int = 0
    ambiguous_gvk: int = 0

    @property
    def skipped(self) -> int:
        return self.seen - self.accepted


def try_get_object_name(definition: Mapping[str, Any],
                        strict: bool = False,
                        stats: Optional[ClassificationStats] = None,
                        name: str = "",
                        warn: bool = True) -> Optional[GroupVersionKind]:
    """
    Determine if a definition is an API object, returning its GVK if so

    :param definition: the raw schema of a single definition
    :param strict: if True, a definition with more than one GVK annotation
        raises an error rather than using the first
    :param stats: optional ClassificationStats to record the outcome in
    :param name: optional definition name, only used in messages
    :param warn: if False, don't log a warning when falling back to the first
        of several GVK annotations
    :return: the first GroupVersionKind of the definition, or None if the
        definition isn't an API object
    :raises AmbiguousGroupVersionKindError: in strict mode, if the definition
        has several GVK annotations
    """
    sd = SchemaDefinition(definition)
    gvks = sd.group_version_kinds
    if not gvks:
        if stats is not None:
            stats.no_gvk += 1
        return None
    # skip definitions without "metadata". they are not API objects that can
    # appear in manifests (e.g. io.k8s.apimachinery.pkg.apis.meta.v1.DeleteOptions)
    # and are treated as plain data types
    if not sd.has_property("metadata"):
        if stats is not None:
            stats.no_metadata += 1
        return None
    if len(gvks) > 1:
        if stats is not None:
            stats.ambiguous_gvk += 1
        if strict:
            raise AmbiguousGroupVersionKindError(f"{name or 'definition'} has "
                                                 f"{len(gvks)} {X_GROUP_VERSION_KIND} "
                                                 f"entries; can't tell which to use")
        if warn:
            logger.warning("%s has %d %s entries; using the first",
                           name or "definition", len(gvks), X_GROUP_VERSION_KIND)
    return GroupVersionKind.from_dict(gvks[0])


def get_object_name(api_definition: ApiObjectDefinition) -> GroupVersionKind:
    """
    Return the GVK of a definition already known to be an API object

    :param api_definition: an ApiObjectDefinition from the index
    :return: its GroupVersionKind
    :raises ApiObjectNameError: if the definition's schema has no usable
        GVK annotation
    """
    # the index builder already reported an ambiguous GVK
    gvk = try_get_object_name(api_definition.schema, name=api_definition.fullname,
                              warn=False)
    if gvk is None:
        raise ApiObjectNameError(f"cannot determine API object name for "
                                 f"{api_definition.fullname}. schema must include "
                                 f"a {X_GROUP_VERSION_KIND} key")
    return gvk


def find_api_object_definitions(schema: Mapping[str, Any],
                                stats: Optional[ClassificationStats] = None,
                                strict: bool = False) -> ApiObjectDefinitions:
    """
    Returns all the API objects in a schema, grouped by their base name

    The key of the returned dict is the base name of the type (i.e.
    'Deployment'). Since API objects may have multiple versions, each value is
    a list of all the versions found, in the order they were found.

    :param schema: either a whole schema document with a 'definitions' key or
        just the definitions map itself
    :param stats: optional ClassificationStats that will be updated with the
        reasons definitions were skipped
    :param strict: passed on to try_get_object_name()
    :return: dict of base name -> list of ApiObjectDefinition
    """
    if stats is None:
        stats = ClassificationStats()
    result: ApiObjectDefinitions = {}
    for typename, definition in get_definitions(schema).items():
        stats.seen += 1
        gvk = try_get_object_name(definition, strict=strict, stats=stats,
                                  name=typename)
        if gvk is None:
            logger.debug("Skipping %s; not an API object", typename)
            continue
        type_name = parse_api_type_name(typename)
        if type_name.version is None:
            stats.unversioned += 1
            logger.debug("Skipping %s; no version in its name", typename)
            continue
        stats.accepted += 1
        result.setdefault(type_name.basename, []).append(
            ApiObjectDefinition(basename=type_name.basename,
                                group=type_name.group,
                                version=type_name.version,
                                fullname=type_name.fullname,
                                schema=definition))
    logger.debug("Found %d API objects of %d kinds in %d definitions "
                 "(%d without GVK, %d without metadata, %d unversioned)",
                 stats.accepted, len(result), stats.seen, stats.no_gvk,
                 stats.no_metadata, stats.unversioned)
    return result


def sort_api_versions(defs: Iterable[ApiObjectDefinition]) -> List[ApiObjectDefinition]:
    """
    Returns a new list of the definitions, least to most preferred version

    The sort is stable, so equal versions keep the order they were found in.
    """
    return sorted(defs, key=api_version_key)


def select_api_objects(api_objects: ApiObjectDefinitions,
                       include: Optional[Iterable[str]] = None,
                       strict: bool = False) -> List[ApiObjectDefinition]:
    """
    Pick one version of each kind of API object

    The latest stable version of each kind is selected unless one of its
    versions is named in 'include', in which case that one is selected.

    :param api_objects: the dict returned by find_api_object_definitions()
    :param include: optional iterable of full definition names to select in
        preference to the latest stable version
    :param strict: if True, naming more than one version of the same kind in
        'include' raises an error; otherwise the first in version order is used
    :return: list with exactly one ApiObjectDefinition per key of api_objects,
        in the same order as the keys
    :raises IncludeConflictError: in strict mode, if 'include' names more than
        one version of a kind
    """
    include = list(include) if include is not None else []
    include_set = set(include)
    matched = set()
    result = []
    for basename, defs in api_objects.items():
        ordered = sort_api_versions(defs)
        # the default is the latest stable version
        selected = ordered[-1]
        included = [d for d in ordered if d.fullname in include_set]
        if included:
            if len(included) > 1:
                names = ", ".join(d.fullname for d in included)
                if strict:
                    raise IncludeConflictError(f"More than one version of {basename} "
                                               f"was included: {names}")
                logger.warning("More than one version of %s was included (%s); "
                               "using %s", basename, names, included[0].fullname)
            selected = included[0]
            matched.update(d.fullname for d in included)
        result.append(selected)
    for name in include:
        if name not in matched:
            logger.warning("Included type %s is not an API object in this schema",
                           name)
    return result
