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
from kubegen.naming import (ApiTypeName, parse_api_type_name, full_swagger_name,
                            is_version_segment, make_api_version, python_attr_name,
                            class_name_for, dprefix)


def test01():
    """
    parse a standard apps group name
    """
    tn = parse_api_type_name("io.k8s.api.apps.v1.Deployment")
    assert isinstance(tn, ApiTypeName)
    assert tn.basename == "Deployment"
    assert tn.group == "io.k8s.api.apps"
    assert tn.version == "v1"
    assert tn.fullname == "io.k8s.api.apps.v1.Deployment"


def test02():
    """
    parse alpha and beta versions
    """
    tn = parse_api_type_name("io.k8s.api.batch.v2alpha1.CronJob")
    assert tn.version == "v2alpha1"
    assert tn.basename == "CronJob"
    tn = parse_api_type_name("io.k8s.api.apps.v1beta2.ReplicaSet")
    assert tn.version == "v1beta2"
    assert tn.group == "io.k8s.api.apps"


def test03():
    """
    the last version segment is the one that splits the name
    """
    tn = parse_api_type_name("com.example.v1.stuff.v2beta1.Widget")
    assert tn.version == "v2beta1"
    assert tn.group == "com.example.v1.stuff"
    assert tn.basename == "Widget"


def test04():
    """
    everything after the version is the basename
    """
    tn = parse_api_type_name("io.example.v1.Outer.Inner")
    assert tn.version == "v1"
    assert tn.basename == "Outer.Inner"


def test05():
    """
    names without a version don't raise
    """
    tn = parse_api_type_name("io.k8s.apimachinery.pkg.util.intstr.IntOrString")
    assert tn.version is None
    assert tn.basename == "IntOrString"
    assert tn.group == "io.k8s.apimachinery.pkg.util.intstr"
    tn = parse_api_type_name("Standalone")
    assert tn.version is None
    assert tn.basename == "Standalone"
    assert tn.group == ""


def test06():
    """
    $refs are accepted, and the fullname is the definition name
    """
    tn = parse_api_type_name("#/definitions/io.k8s.api.core.v1.Pod")
    assert tn.fullname == "io.k8s.api.core.v1.Pod"
    assert tn.basename == "Pod"
    assert tn.version == "v1"
    assert full_swagger_name("#/definitions/io.k8s.api.core.v1.Pod") == \
        "io.k8s.api.core.v1.Pod"


def test07():
    """
    parsing is deterministic
    """
    name = "io.k8s.api.networking.v1beta1.Ingress"
    assert parse_api_type_name(name) == parse_api_type_name(name)


def test08():
    """
    check what counts as a version segment
    """
    for s in ("v1", "v2", "v10", "v1beta1", "v2alpha3", "v1beta"):
        assert is_version_segment(s), s
    for s in ("v", "version", "beta1", "V1", "v1gamma1", "v1beta1x", "apps", ""):
        assert not is_version_segment(s), s


def test09():
    """
    apiVersion strings for core and non-core groups
    """
    assert make_api_version("", "v1") == "v1"
    assert make_api_version("core", "v1") == "v1"
    assert make_api_version(None, "v1") == "v1"
    assert make_api_version("apps", "v1") == "apps/v1"
    assert make_api_version("networking.k8s.io", "v1beta1") == "networking.k8s.io/v1beta1"


def test10():
    """
    JSON property names that aren't legal Python names
    """
    assert python_attr_name("replicas") == "replicas"
    assert python_attr_name("continue") == "continue_"
    assert python_attr_name("not") == "not_"
    assert python_attr_name("$ref") == f"{dprefix}ref"
    assert python_attr_name("x-kubernetes-embedded-resource") == \
        "x_kubernetes_embedded_resource"
    assert python_attr_name("int") == "int_"
    assert python_attr_name("list") == "list_"
    assert python_attr_name("Optional") == "Optional_"
    assert python_attr_name("integer") == "integer"


def test11():
    """
    class names from basenames
    """
    assert class_name_for("Deployment") == "Deployment"
    assert class_name_for("v2beta1") == "V2beta1"
    assert class_name_for("Outer.inner") == "OuterInner"
    assert class_name_for("some-thing") == "SomeThing"
    assert class_name_for("3d") == "T3d"
