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
from kubegen.meta import (ApiObject, KubeStruct, KubegenException, ApiObjectNameError,
                          AmbiguousGroupVersionKindError, IncludeConflictError,
                          SchemaFetchError, ImportSpecError, get_clean_dict,
                          get_yaml, get_json)
from kubegen.naming import ApiTypeName, parse_api_type_name, make_api_version
from kubegen.versions import compare_api_versions, version_sort_key
from kubegen.objects import (GroupVersionKind, ApiObjectDefinition, ClassificationStats,
                             try_get_object_name, get_object_name,
                             find_api_object_definitions, select_api_objects)
from kubegen.typegen import TypeGenerator, format_code
from kubegen.codegen import generate_construct
from kubegen.config import ImportOptions, match_import_spec
from kubegen.importer import ImportKubernetesApi, Stage

__version__ = "0.1.0"

__all__ = ["ApiObject", "KubeStruct", "KubegenException", "ApiObjectNameError",
           "AmbiguousGroupVersionKindError", "IncludeConflictError",
           "SchemaFetchError", "ImportSpecError", "get_clean_dict", "get_yaml",
           "get_json", "ApiTypeName", "parse_api_type_name", "make_api_version",
           "compare_api_versions", "version_sort_key", "GroupVersionKind",
           "ApiObjectDefinition", "ClassificationStats", "try_get_object_name",
           "get_object_name", "find_api_object_definitions", "select_api_objects",
           "TypeGenerator", "format_code", "generate_construct", "ImportOptions",
           "match_import_spec", "ImportKubernetesApi", "Stage"]
