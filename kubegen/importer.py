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
Drives a complete import of a Kubernetes API into a Python module

An import goes through a fixed series of stages:

    FETCHING -> INDEXING -> SELECTING -> EMITTING -> DONE

If anything raises along the way the importer moves to FAILED and the
exception propagates; no stage is retried and no partial output is written.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from kubegen.codegen import generate_construct
from kubegen.config import ImportOptions
from kubegen.fetch import download_schema, load_schema
from kubegen.objects import (ApiObjectDefinition, ApiObjectDefinitions,
                             ClassificationStats, find_api_object_definitions,
                             get_object_name, select_api_objects)
from kubegen.typegen import TypeGenerator, format_code

logger = logging.getLogger(__name__)


class Stage(Enum):
    PENDING = "pending"
    FETCHING = "fetching"
    INDEXING = "indexing"
    SELECTING = "selecting"
    EMITTING = "emitting"
    DONE = "done"
    FAILED = "failed"


header_lines = ["# generated by kubegen",
                "import dataclasses",
                "from dataclasses import dataclass",
                "from typing import Any, Dict, List, Optional, Union",
                "",
                "from kubegen.meta import ApiObject, KubeStruct"]


class ImportKubernetesApi(object):
    """
    Generates a Python module with a class per Kubernetes API object

    One instance performs one import; create a new instance for another.

    :param options: ImportOptions for the run
    :param client: optional httpx.Client to download the schema with
    """
    def __init__(self, options: ImportOptions, client: Optional[httpx.Client] = None):
        self.options = options
        self.client = client
        self.stage = Stage.PENDING
        self.failed_stage: Optional[Stage] = None
        self.stats = ClassificationStats()
        self.schema: Optional[Dict[str, Any]] = None
        self.api_objects: Optional[ApiObjectDefinitions] = None
        self.selected: Optional[List[ApiObjectDefinition]] = None
        self.class_names: List[str] = []

    @property
    def module_names(self) -> List[str]:
        return [self.options.module_name]

    def _enter(self, stage: Stage):
        logger.debug("import of k8s@%s: %s -> %s", self.options.api_version,
                     self.stage.value, stage.value)
        self.stage = stage

    def fetch(self) -> Dict[str, Any]:
        if self.options.schema_path is not None:
            return load_schema(self.options.schema_path)
        return download_schema(self.options.api_version,
                               url_template=self.options.url_template,
                               client=self.client)

    def emit_construct_for_api_object(self, typegen: TypeGenerator,
                                      apidef: ApiObjectDefinition) -> str:
        object_name = get_object_name(apidef)
        return generate_construct(typegen,
                                  fqn=apidef.fullname,
                                  group=object_name.group,
                                  kind=object_name.kind,
                                  version=object_name.version,
                                  schema=apidef.schema)

    def generate(self) -> str:
        """
        Run the import and return the source of the generated module

        :return: Python source for the module
        :raises SchemaFetchError: if the schema can't be obtained
        :raises KubegenException: for any other failure in the core
        """
        if self.stage is not Stage.PENDING:
            raise RuntimeError(f"This import has already been run (stage "
                               f"{self.stage.value}); create a new one")
        try:
            self._enter(Stage.FETCHING)
            self.schema = self.fetch()

            self._enter(Stage.INDEXING)
            self.api_objects = find_api_object_definitions(self.schema,
                                                           stats=self.stats,
                                                           strict=self.options.strict)

            self._enter(Stage.SELECTING)
            self.selected = select_api_objects(self.api_objects,
                                               include=self.options.include,
                                               strict=self.options.strict)

            self._enter(Stage.EMITTING)
            typegen = TypeGenerator(self.schema, exclude=self.options.exclude)
            self.class_names = [self.emit_construct_for_api_object(typegen, o)
                                for o in self.selected]
            lines = list(header_lines)
            lines.append("")
            lines.append("")
            lines.append(typegen.render())
            code = format_code("\n".join(lines), style=self.options.style)
        except Exception:
            self.failed_stage = self.stage
            self.stage = Stage.FAILED
            logger.debug("import of k8s@%s failed while %s", self.options.api_version,
                         self.failed_stage.value)
            raise
        self._enter(Stage.DONE)
        logger.info("Generated %d API objects (%d classes) for k8s@%s; "
                    "%d of %d definitions were not API objects",
                    len(self.selected), len(typegen.class_names),
                    self.options.api_version, self.stats.skipped, self.stats.seen)
        return code

    def import_module(self, outdir: Union[str, Path]) -> Path:
        """
        Run the import and write the module into outdir

        The file is only written once the whole module has been generated.

        :param outdir: directory to write into; created if needed
        :return: the Path of the written module
        """
        code = self.generate()
        path = Path(outdir)
        if not path.exists():
            path.mkdir(parents=True)
        mod = path / f"{self.options.module_name}.py"
        mod.write_text(code)
        return mod
