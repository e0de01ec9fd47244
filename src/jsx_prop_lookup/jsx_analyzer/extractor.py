"""
Component declaration and JSX usage extraction.

Walks one parsed file and produces:
- declarations: named functions / closures with the props they declare
- usages: every prop occurrence (declared fields and JSX attributes)
- sites: one entry per JSX element invoking a component

Nodes are classified through `nodes.kind_of` and dispatched from a table;
kinds without a handler are simply descended into.
"""

from dataclasses import dataclass
from typing import Any

from tree_sitter import QueryCursor

from .models import (
    REST_PROP,
    SPREAD_PROP,
    ComponentDeclaration,
    FileAnalysis,
    PropsInterface,
    PropUsage,
    UsageSite,
)
from .nodes import FUNCTION_KINDS, NodeKind, kind_of, location, node_text
from .parser import ParsedSource
from .queries import compile_query
from .values import render_attribute_value

PROPS_SUFFIX = "Props"

# Higher-order wrappers whose first argument is the component function itself.
COMPONENT_WRAPPERS = frozenset({"memo", "forwardRef", "React.memo", "React.forwardRef"})


@dataclass(frozen=True)
class ExtractOptions:
    """Filters applied while extracting one file."""
    target_component: str | None = None
    target_prop: str | None = None
    include_types: bool = True

    def wants_prop(self, name: str) -> bool:
        return self.target_prop is None or name == self.target_prop


# ============================================================================
# Type Associations
# ============================================================================

def _collect_prop_types(body: Any) -> dict[str, str]:
    """Map property name -> declared type text for an object-like type body."""
    prop_types: dict[str, str] = {}
    for child in body.named_children:
        if child.type != "property_signature":
            continue
        name_node = child.child_by_field_name("name")
        type_node = child.child_by_field_name("type")
        if name_node is None:
            continue
        name = node_text(name_node).strip("\"'")
        type_text = node_text(type_node).lstrip(":").strip() if type_node is not None else "any"
        prop_types[name] = type_text or "any"
    return prop_types


def collect_props_interfaces(parsed: ParsedSource) -> dict[str, PropsInterface]:
    """
    Find `<Name>Props` interfaces and type aliases in one file.

    Args:
        parsed: Parsed source file

    Returns:
        Mapping of component name -> PropsInterface, scoped to this file
    """
    interfaces: dict[str, PropsInterface] = {}

    for pattern_name in ("INTERFACE", "TYPE_ALIAS"):
        cursor = QueryCursor(compile_query(parsed.language, pattern_name))
        for _, captured in cursor.matches(parsed.root_node):
            name_nodes = captured.get("type_name") or []
            body_nodes = captured.get("type_body") or []
            if not name_nodes:
                continue

            type_name = node_text(name_nodes[0])
            if not type_name.endswith(PROPS_SUFFIX):
                continue
            component_name = type_name[: -len(PROPS_SUFFIX)]
            if not component_name:
                continue

            prop_types = _collect_prop_types(body_nodes[0]) if body_nodes else {}
            interfaces[component_name] = PropsInterface(
                name=type_name,
                component_name=component_name,
                prop_types=prop_types,
            )

    return interfaces


# ============================================================================
# JSX Names
# ============================================================================

def jsx_element_name(name_node: Any) -> tuple[str, str] | None:
    """
    Resolve a JSX element name to its (full, local) pair.

    `Button` -> ("Button", "Button"); `UI.Select` -> ("UI.Select", "Select").
    Namespaced names (`svg:rect`) are not component references.
    """
    if name_node is None:
        return None
    if name_node.type == "identifier":
        name = node_text(name_node)
        return name, name
    if name_node.type in ("member_expression", "nested_identifier"):
        full = "".join(node_text(name_node).split())
        return full, full.rsplit(".", 1)[-1]
    return None


# ============================================================================
# File Extractor
# ============================================================================

class _FileExtractor:
    """Single-use walker over one file's tree."""

    def __init__(self, file: str, options: ExtractOptions, interfaces: dict[str, PropsInterface]):
        self._file = file
        self._options = options
        self._interfaces = interfaces
        self.result = FileAnalysis(file=file, interfaces=interfaces)
        self._handlers = {
            NodeKind.FUNCTION_DECLARATION: self._visit_function_declaration,
            NodeKind.VARIABLE_DECLARATOR: self._visit_variable_declarator,
            NodeKind.JSX_ELEMENT: self._visit_jsx_element,
            NodeKind.JSX_SELF_CLOSING: self._visit_jsx_self_closing,
        }

    def walk(self, root: Any) -> FileAnalysis:
        # Pre-order, document order; iterative so deep JSX trees cannot hit
        # the recursion limit.
        stack = [root]
        while stack:
            node = stack.pop()
            handler = self._handlers.get(kind_of(node))
            if handler is not None:
                handler(node)
            stack.extend(reversed(node.named_children))
        return self.result

    # ------------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------------

    def _visit_function_declaration(self, node: Any) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        self._declare(node_text(name_node), node, node)

    def _visit_variable_declarator(self, node: Any) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.type != "identifier":
            return
        function = self._unwrap_component_function(node.child_by_field_name("value"))
        if function is None:
            return
        self._declare(node_text(name_node), node, function)

    def _unwrap_component_function(self, value: Any) -> Any | None:
        """Return the function bound by a declarator, looking through memo/forwardRef."""
        while value is not None:
            kind = kind_of(value)
            if kind in FUNCTION_KINDS:
                return value
            if kind is NodeKind.PARENTHESIZED or kind is NodeKind.WRAPPED:
                value = value.named_children[0] if value.named_children else None
                continue
            if kind is NodeKind.CALL:
                callee = node_text(value.child_by_field_name("function"))
                arguments = value.child_by_field_name("arguments")
                if callee not in COMPONENT_WRAPPERS or arguments is None or not arguments.named_children:
                    return None
                value = arguments.named_children[0]
                continue
            return None
        return None

    def _declare(self, name: str, decl_node: Any, function: Any) -> None:
        target = self._options.target_component
        if target and name != target:
            return

        line, column = location(decl_node)
        interface = self._interfaces.get(name)
        declaration = ComponentDeclaration(
            component_name=name,
            file=self._file,
            line=line,
            column=column,
            props_interface=interface.name if interface else None,
        )

        pattern = self._first_parameter(function)
        if pattern is not None and pattern.type == "object_pattern":
            declaration.props.extend(self._props_from_object_pattern(pattern, name, interface))
        elif pattern is not None and pattern.type == "identifier":
            body = function.child_by_field_name("body")
            if body is not None:
                declaration.props.extend(self._props_from_member_access(body, node_text(pattern), name))

        self.result.declarations.append(declaration)
        self.result.usages.extend(declaration.props)

    @staticmethod
    def _first_parameter(function: Any) -> Any | None:
        """The binding pattern of a function's first parameter."""
        single = function.child_by_field_name("parameter")
        if single is not None:
            return single

        params = function.child_by_field_name("parameters")
        if params is None:
            return None
        for child in params.named_children:
            if child.type == "comment":
                continue
            if child.type in ("required_parameter", "optional_parameter"):
                return child.child_by_field_name("pattern")
            if child.type == "assignment_pattern":
                return child.child_by_field_name("left")
            return child
        return None

    def _props_from_object_pattern(
        self, pattern: Any, component_name: str, interface: PropsInterface | None
    ) -> list[PropUsage]:
        props: list[PropUsage] = []
        prop_types = interface.prop_types if interface else {}

        for field in pattern.named_children:
            if field.type == "rest_pattern":
                name, is_spread = REST_PROP, True
            elif field.type == "shorthand_property_identifier_pattern":
                name, is_spread = node_text(field), False
            elif field.type == "pair_pattern":
                name, is_spread = node_text(field.child_by_field_name("key")).strip("\"'"), False
            elif field.type == "object_assignment_pattern":
                name, is_spread = node_text(field.child_by_field_name("left")), False
            else:
                continue

            if not name or not self._options.wants_prop(name):
                continue
            line, column = location(field)
            props.append(PropUsage(
                prop_name=name,
                component_name=component_name,
                file=self._file,
                line=line,
                column=column,
                is_spread=is_spread,
                type=None if is_spread else prop_types.get(name),
            ))

        return props

    def _props_from_member_access(self, body: Any, param_name: str, component_name: str) -> list[PropUsage]:
        """Props read as `<param>.<name>` inside the function body, first access wins."""
        props: list[PropUsage] = []
        seen: set[str] = set()
        prop_types = self._interfaces[component_name].prop_types if component_name in self._interfaces else {}

        stack = [body]
        while stack:
            node = stack.pop()
            stack.extend(reversed(node.named_children))
            if kind_of(node) is not NodeKind.MEMBER:
                continue
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None or obj.type != "identifier" or node_text(obj) != param_name:
                continue
            if prop.type != "property_identifier":
                continue
            name = node_text(prop)
            if name in seen or not self._options.wants_prop(name):
                continue
            seen.add(name)
            line, column = location(node)
            props.append(PropUsage(
                prop_name=name,
                component_name=component_name,
                file=self._file,
                line=line,
                column=column,
                type=prop_types.get(name),
            ))

        return props

    # ------------------------------------------------------------------------
    # JSX Usage Sites
    # ------------------------------------------------------------------------

    def _visit_jsx_element(self, node: Any) -> None:
        opening = node.child_by_field_name("open_tag")
        if opening is None:
            opening = next((c for c in node.named_children if c.type == "jsx_opening_element"), None)
        if opening is not None:
            self._record_site(node, opening)

    def _visit_jsx_self_closing(self, node: Any) -> None:
        self._record_site(node, node)

    def _record_site(self, element: Any, tag: Any) -> None:
        name_node = tag.child_by_field_name("name")
        # Fragments (<>...</>) have no name; their children are walked as usual.
        names = jsx_element_name(name_node)
        if names is None:
            return
        full, local = names
        target = self._options.target_component
        if target and target != full and target != local:
            return

        props: list[PropUsage] = []
        for attr in tag.named_children:
            if attr == name_node:
                continue
            usage = self._attribute_usage(attr, full)
            if usage is not None:
                props.append(usage)

        line, column = location(element)
        self.result.sites.append(UsageSite(
            component_name=full,
            local_name=local,
            file=self._file,
            line=line,
            column=column,
            props=tuple(props),
        ))
        self.result.usages.extend(p for p in props if self._options.wants_prop(p.prop_name))

    def _attribute_usage(self, attr: Any, component_name: str) -> PropUsage | None:
        kind = kind_of(attr)
        line, column = location(attr)

        if kind is NodeKind.JSX_ATTRIBUTE:
            children = attr.named_children
            if not children:
                return None
            value_node = children[1] if len(children) > 1 else None
            return PropUsage(
                prop_name=node_text(children[0]),
                component_name=component_name,
                file=self._file,
                line=line,
                column=column,
                value=render_attribute_value(value_node) if value_node is not None else None,
            )

        if kind is NodeKind.JSX_EXPRESSION and any(c.type == "spread_element" for c in attr.named_children):
            return PropUsage(
                prop_name=SPREAD_PROP,
                component_name=component_name,
                file=self._file,
                line=line,
                column=column,
                is_spread=True,
            )

        return None


def extract_components(
    parsed: ParsedSource,
    options: ExtractOptions | None = None,
    interfaces: dict[str, PropsInterface] | None = None,
) -> FileAnalysis:
    """
    Extract component declarations, prop usages and JSX sites from one file.

    Args:
        parsed: Parsed source file
        options: Component/prop filters and type-info switch
        interfaces: Pre-collected `<Name>Props` map for this file; collected
            here when omitted (and type info is enabled)

    Returns:
        FileAnalysis carrying the interface map that was used
    """
    options = options or ExtractOptions()
    if not options.include_types:
        interfaces = {}
    elif interfaces is None:
        interfaces = collect_props_interfaces(parsed)

    extractor = _FileExtractor(parsed.file, options, interfaces)
    return extractor.walk(parsed.root_node)
