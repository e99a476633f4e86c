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
Options for a single Kubernetes API import

Everything a generation run needs is carried in an ImportOptions instance;
there are no module-level defaults for the API version, so two runs with
different options never interfere with each other.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from kubegen.meta import ImportSpecError

k8s_source = "k8s"


@dataclass
class ImportOptions:
    """
    Attributes:
        api_version: the Kubernetes version to generate, such as '1.15.0'
        include: full definition names of API objects to select instead of the
            latest stable version of their kind
        exclude: full definition names of types to render as Any rather than
            generate
        strict: if True, ambiguous GVK annotations or several included versions
            of one kind are errors rather than warnings
        style: formatter for the generated code: 'black', 'autopep8', or None
        url_template: optional schema URL format string with an {api_version}
            field
        schema_path: optional local schema file to use instead of downloading
        module_name: name of the generated module (without '.py')
    """
    api_version: str
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    strict: bool = False
    style: Optional[str] = "black"
    url_template: Optional[str] = None
    schema_path: Optional[str] = None
    module_name: str = "k8s"

    def __post_init__(self):
        if not self.api_version:
            raise ValueError("api_version must be supplied")
        if self.style not in ('black', 'autopep8', None):
            raise ValueError(f"Unrecognized style: {self.style}")


def match_import_spec(source: str, include: Optional[List[str]] = None,
                      exclude: Optional[List[str]] = None,
                      default_api_version: Optional[str] = None,
                      **kwargs) -> Optional[ImportOptions]:
    """
    Turn an import source such as 'k8s@1.15.0' into ImportOptions

    :param source: the import source; only 'k8s' and 'k8s@<version>' are
        recognized
    :param include: passed on to ImportOptions
    :param exclude: passed on to ImportOptions
    :param default_api_version: version to use if source is just 'k8s'
    :param kwargs: any other ImportOptions fields
    :return: ImportOptions, or None if the source isn't a Kubernetes source
    :raises ImportSpecError: if the version can't be determined
    """
    if source != k8s_source and not source.startswith(f"{k8s_source}@"):
        return None
    parts = source.split("@", 1)
    api_version = parts[1] if len(parts) == 2 else default_api_version
    if not api_version:
        raise ImportSpecError(f"No API version in '{source}'; use "
                              f"{k8s_source}@<version>")
    return ImportOptions(api_version=api_version,
                         include=list(include or []),
                         exclude=list(exclude or []),
                         **kwargs)
