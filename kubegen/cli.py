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
Command line front end for kubegen

Usage is:

    kubegen k8s@<version> [-o <outdir>] [--include <fqn>]... [--exclude <fqn>]...

This downloads the Kubernetes schema for <version>, selects one version of
each API object, and writes the module <outdir>/k8s.py.
"""
import argparse
import logging
import sys
from typing import List, Optional

from kubegen.config import match_import_spec
from kubegen.importer import ImportKubernetesApi
from kubegen.meta import KubegenException


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubegen",
        description="Generate Python classes for Kubernetes API objects")
    parser.add_argument("source",
                        help="what to import: k8s@<version>, e.g. k8s@1.15.0")
    parser.add_argument("-o", "--output", default="imports",
                        help="directory to write the generated module into")
    parser.add_argument("--api-version", default=None,
                        help="Kubernetes version to use when source is just 'k8s'")
    parser.add_argument("--include", action="append", default=[],
                        help="full name of an API object version to select "
                             "instead of the latest stable one; may be repeated")
    parser.add_argument("--exclude", action="append", default=[],
                        help="full name of a type to render as Any; may be repeated")
    parser.add_argument("--schema-file", default=None,
                        help="use this local schema file instead of downloading")
    parser.add_argument("--url-template", default=None,
                        help="schema URL with an {api_version} placeholder")
    parser.add_argument("--style", choices=["black", "autopep8", "none"],
                        default="black", help="formatter for the generated code")
    parser.add_argument("--module-name", default="k8s",
                        help="name of the generated module")
    parser.add_argument("--strict", action="store_true",
                        help="treat ambiguous GVKs and conflicting includes as errors")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more logging; repeat for debug output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = make_parser().parse_args(argv)
    level = (logging.WARNING if args.verbose == 0 else
             logging.INFO if args.verbose == 1 else
             logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        options = match_import_spec(args.source,
                                    include=args.include,
                                    exclude=args.exclude,
                                    default_api_version=args.api_version,
                                    strict=args.strict,
                                    style=None if args.style == "none" else args.style,
                                    url_template=args.url_template,
                                    schema_path=args.schema_file,
                                    module_name=args.module_name)
        if options is None:
            print(f"Unrecognized import source: {args.source}", file=sys.stderr)
            return 1
        print(f">>>Processing {args.source}")
        importer = ImportKubernetesApi(options)
        path = importer.import_module(args.output)
    except KubegenException as e:
        print(f"Import failed: {e}", file=sys.stderr)
        return 1
    print(f">>>Wrote {len(importer.selected)} API objects to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
