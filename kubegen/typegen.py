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
Generation of Python dataclasses from JSON-Schema definitions

A TypeGenerator is created over the full definitions map of a schema. Each
call to emit_type() or emit_custom_type() adds a class to the generator, along
with every class it references (directly or indirectly) through '$ref'; a
definition is only ever emitted once no matter how often it's referenced.
render() then returns the source for all the classes emitted so far.

Just some notes to remember how the mapping works:

- definitions with properties become @dataclass classes
- definitions without properties (IntOrString, Quantity, Time, ...) are
  never classes; references to them are replaced with the equivalent
  scalar/container annotation
- references to classes are quoted forward references so that the order the
  classes appear in doesn't matter
- anything named in the exclude list is typed as Any and not emitted
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from kubegen.naming import (parse_api_type_name, full_swagger_name, python_attr_name,
                            class_name_for)
from kubegen.schema import SchemaDefinition, get_definitions

logger = logging.getLogger(__name__)


types_map = {"boolean": "bool",
             "integer": "int",
             "string": "str",
             "float": "float",
             "number": "float"}


# names the generated module imports; generated classes can't use them
reserved_names = {"Any", "Dict", "List", "Optional", "Union", "ApiObject",
                  "KubeStruct", "dataclass", "dataclasses"}


def format_code(code: str, style: Optional[str] = "black") -> str:
    """
    Run generated code through a formatter

    :param code: Python source
    :param style: one of 'black', 'autopep8', or None for no formatting
    :return: the formatted code
    :raises RuntimeError: if an unrecognized style is supplied
    """
    if style not in ('black', 'autopep8', None):
        raise RuntimeError(f'Unrecognized style: {style}')
    if style is None:
        return code
    if style == "autopep8":
        from autopep8 import fix_code
        return fix_code(code, options={"max_line_length": 88,
                                       "experimental": 1})
    from black import format_str, Mode, NothingChanged
    try:
        result = format_str(code, mode=Mode())
    except NothingChanged:
        result = code
    return result


class PropertyDescriptor(object):
    def __init__(self, containing_class: 'ClassDescriptor', name: str,
                 d: Mapping[str, Any], generator: 'TypeGenerator'):
        self.json_name = name
        self.name = python_attr_name(name)
        self.containing_class = containing_class
        self.description = d.get('description', "")
        self.annotation, self.container_type = generator.type_for_schema(d)

    @staticmethod
    def as_required(anno: str, as_required: bool) -> str:
        return anno if as_required else f"Optional[{anno}]"

    def as_python_typeanno(self, as_required: bool) -> str:
        parts = ["    ", self.name, ": ", self.as_required(self.annotation, as_required)]
        if not as_required:
            # default optional attrs so they needn't be supplied when creating
            # an instance programmatically
            if self.container_type is not None:
                factory = "list" if self.container_type is list else "dict"
                parts.append(f" = dataclasses.field(default_factory={factory})")
            else:
                parts.append(" = None")
        return "".join(parts)


class ClassDescriptor(object):
    def __init__(self, full_name: str, short_name: str, d: Mapping[str, Any],
                 base: str = "KubeStruct",
                 class_attrs: Optional[Dict[str, str]] = None):
        sd = SchemaDefinition(d)
        self.full_name = full_name
        self.short_name = short_name
        self.base = base
        self.description = sd.description
        self.all_properties = sd.properties
        self.required = sd.required
        self.class_attrs = dict(class_attrs) if class_attrs else {}
        self.required_props: List[PropertyDescriptor] = []
        self.optional_props: List[PropertyDescriptor] = []

    def process_properties(self, generator: 'TypeGenerator'):
        self.required_props = []
        self.optional_props = []
        for k, v in self.all_properties.items():
            fd = PropertyDescriptor(self, k, v, generator)
            if k in self.required:
                self.required_props.append(fd)
            else:
                self.optional_props.append(fd)
        self.required_props.sort(key=lambda x: x.name)
        self.optional_props.sort(key=lambda x: x.name)

    @property
    def renames(self) -> Dict[str, str]:
        return {p.name: p.json_name
                for p in self.required_props + self.optional_props
                if p.name != p.json_name}

    @staticmethod
    def split_line(line, prefix: str = "   ", hanging_indent: str = "",
                   linelen: int = 90) -> List[str]:
        parts = []
        if line is not None:
            words = line.split()
            current_line = [prefix]
            for w in words:
                w = w.strip()
                if not w:
                    continue
                if (sum(len(s) for s in current_line) + len(current_line) + len(w) >
                        linelen):
                    parts.append(" ".join(current_line))
                    current_line = [prefix]
                    if hanging_indent:
                        current_line.append(hanging_indent)
                current_line.append(w)
            else:
                if len(current_line) > 1:
                    parts.append(" ".join(current_line))
        return parts

    @staticmethod
    def _doc_safe(text: Optional[str]) -> Optional[str]:
        if text is None:
            return None
        return text.replace('"""', "'''")

    def as_python_class(self) -> str:
        lines = ["@dataclass", f"class {self.short_name}({self.base}):"]
        # now the docstring
        ds_parts = ['    r"""']
        ds_parts.extend(self.split_line(self._doc_safe(self.description)))
        ds_parts.append("")
        ds_parts.append(f'    Full name: {self.full_name}')
        if self.required_props or self.optional_props:
            ds_parts.append("")
            ds_parts.append("    Attributes:")
            for p in self.required_props + self.optional_props:
                ds_parts.extend(self.split_line(self._doc_safe(f'{p.name}: '
                                                               f'{p.description}'),
                                                hanging_indent="   "))
        ds_parts.append('    """')
        lines.extend(ds_parts)
        lines.append("")
        for k, v in self.class_attrs.items():
            lines.append(f"    {k} = {v!r}")
        renames = self.renames
        if renames:
            lines.append(f"    _renames = {renames!r}")
        if self.class_attrs or renames:
            lines.append("")
        for p in self.required_props:
            lines.append(p.as_python_typeanno(True))
        for p in (x for x in self.optional_props if x.container_type is None):
            lines.append(p.as_python_typeanno(False))
        for p in (x for x in self.optional_props if x.container_type is not None):
            lines.append(p.as_python_typeanno(False))
        if not (self.required_props or self.optional_props):
            lines.append("    pass")
        lines.append("")
        return "\n".join(lines)


class TypeGenerator(object):
    """
    Accumulates dataclass declarations for definitions in a schema

    :param definitions: the definitions map of a schema (a whole schema document
        with a 'definitions' key is also accepted)
    :param exclude: optional list of full definition names (or $refs) that
        should be typed as Any rather than generated
    """
    def __init__(self, definitions: Mapping[str, Any],
                 exclude: Optional[List[str]] = None):
        self.definitions = get_definitions(definitions)
        self.exclude = {full_swagger_name(e) for e in (exclude or [])}
        # key -> class name, for every class emitted (or being emitted)
        self._emitted: Dict[str, str] = {}
        self._names_taken = set(reserved_names)
        self._classes: List[ClassDescriptor] = []

    @property
    def class_names(self) -> List[str]:
        return [cd.short_name for cd in self._classes]

    def is_emitted(self, key: str) -> bool:
        return key in self._emitted

    def _allocate_name(self, fqn: str, preferred: Optional[str] = None) -> str:
        type_name = parse_api_type_name(fqn)
        base = preferred if preferred is not None else class_name_for(type_name.basename)
        candidates = [base]
        if type_name.version:
            candidates.append(f"{base}{class_name_for(type_name.version)}")
            group_tail = type_name.group.split(".")[-1] if type_name.group else ""
            if group_tail:
                candidates.append(f"{base}{class_name_for(group_tail)}"
                                  f"{class_name_for(type_name.version)}")
        for c in candidates:
            if c not in self._names_taken:
                name = c
                break
        else:
            i = 2
            while f"{base}{i}" in self._names_taken:
                i += 1
            name = f"{base}{i}"
        if name != base:
            logger.debug("Name %s already in use; %s will be generated as %s",
                         base, fqn, name)
        self._names_taken.add(name)
        return name

    def type_for_ref(self, fqn: str) -> Tuple[str, Optional[type]]:
        """
        Return the annotation for a reference to the named definition

        Emits the referenced class if needed.

        :param fqn: full name of a definition
        :return: tuple of (annotation string, container type); container type
            is list or dict if the annotation is for one of those, else None
        """
        if fqn in self.exclude:
            return "Any", None
        target = self.definitions.get(fqn)
        if target is None:
            logger.warning("Reference to unknown definition %s; using Any", fqn)
            return "Any", None
        if not SchemaDefinition(target).has_properties():
            return self.type_for_schema(target)
        return f"'{self.emit_type(fqn)}'", None

    def type_for_schema(self, d: Mapping[str, Any]) -> Tuple[str, Optional[type]]:
        """
        Return the annotation for an inline schema

        :param d: an inline schema, such as the value of a property
        :return: tuple of (annotation string, container type)
        """
        sd = SchemaDefinition(d)
        if sd.ref:
            return self.type_for_ref(sd.ref)
        ctype = sd.type
        if sd.format == "int-or-string":
            return "Union[int, str]", None
        if ctype == "array":
            item_anno, _ = self.type_for_schema(d.get("items") or {})
            return f"List[{item_anno}]", list
        if ctype == "object" or (ctype is None and sd.has_properties()):
            # either an untyped key/value object or a free-form object; nested
            # inline objects with their own properties are also left as dicts
            ap = d.get("additionalProperties")
            if isinstance(ap, Mapping) and ap:
                value_anno, _ = self.type_for_schema(ap)
                return f"Dict[str, {value_anno}]", dict
            return "Dict[str, Any]", dict
        if ctype in types_map:
            return types_map[ctype], None
        return "Any", None

    def emit_type(self, fqn: str) -> str:
        """
        Emit a dataclass for the named definition, plus everything it references

        :param fqn: full name of a definition in the definitions map
        :return: the name of the generated class
        :raises KeyError: if there's no such definition
        """
        if fqn in self._emitted:
            return self._emitted[fqn]
        return self.emit_custom_type(fqn, self.definitions[fqn], key=fqn)

    def emit_custom_type(self, full_name: str, d: Mapping[str, Any],
                         key: Optional[str] = None,
                         name: Optional[str] = None,
                         base: str = "KubeStruct",
                         class_attrs: Optional[Dict[str, str]] = None) -> str:
        """
        Emit a dataclass for an arbitrary schema

        :param full_name: the definition name the schema came from; used for the
            docstring and to derive a class name if none is given
        :param d: the schema for the class
        :param key: the key to record the class under so it's only emitted once;
            defaults to full_name
        :param name: optional preferred class name; a suffix is added if it's
            already taken
        :param base: name of the base class
        :param class_attrs: optional dict of class attribute name -> value to
            add to the class body
        :return: the name of the generated class
        """
        key = key if key is not None else full_name
        if key in self._emitted:
            return self._emitted[key]
        short_name = self._allocate_name(full_name, preferred=name)
        # record before processing properties; definitions can be recursive
        self._emitted[key] = short_name
        cd = ClassDescriptor(full_name, short_name, d, base=base,
                             class_attrs=class_attrs)
        self._classes.append(cd)
        cd.process_properties(self)
        return short_name

    def render(self) -> str:
        """
        Returns the source of all classes emitted so far, in emission order
        """
        return "\n\n".join(cd.as_python_class() for cd in self._classes)
