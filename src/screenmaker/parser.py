import math
import re
import warnings
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

PropertyValue = Union[str, int, float, bool]

NUMBER_RE = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')
INDENT_RE = re.compile(r'^(\s*)')

# Line shapes
INLINE_ELEMENT_RE = re.compile(r'^\s*-\s*(?P<body>.*)$')
INLINE_BODY_RE = re.compile(r'^(?P<label>.*?)\s*\{\s*(?P<props>.*?)\s*\}\s*$')
ELEMENT_TYPE_RE = re.compile(r'^\w+$')
BLOCK_ELEMENT_RE = re.compile(r'^(?P<type>[A-Za-z][A-Za-z0-9_]*):\s*(?P<label>.*)$')
PROPERTY_RE = re.compile(r'^\s*(?P<key>[A-Za-z_][\w-]*):\s*(?P<value>.*)$')
SCREEN_INLINE_RE = re.compile(r'^Screen:\s*(?P<rest>.*)$')
SCREEN_PROPS_RE = re.compile(r'^(?P<title>.*?)\s*\(\s*(?P<props>.*?)\s*\)\s*$')
SIZE_RE = re.compile(r'^\s*(\d+)\s*[,x]\s*(\d+)\s*$')

# Only this element kind opens a nesting level in the inline grammar
CONTAINER_KINDS = frozenset({'bottomnavigationbar'})
# Not given the injected default alignment; the renderer defaults it to right
OWN_ALIGN_KINDS = frozenset({'floatingactionbutton'})


@dataclass(frozen=True)
class ScreenDefaults:
    """Values applied when a screen or element leaves a setting out."""

    width: int = 360
    height: int = 640
    background_color: str = '#ffffff'
    align: str = 'center'


DEFAULT_SCREEN = ScreenDefaults()


# Line kinds produced by classify_line
BLANK = 'blank'
COMMENT = 'comment'
SCREEN_BLOCK = 'screen_block'
INLINE_ELEMENT = 'inline_element'
BLOCK_ELEMENT = 'block_element'
CHILDREN_MARKER = 'children_marker'
PROPERTY = 'property'
UNKNOWN = 'unknown'


def coerce_value(text: str) -> PropertyValue:
    """Coerce a raw property string into a bool, number or string.

    Order matters: the literals true/false first, then a full-string decimal
    number, then a double-quoted string (quotes stripped), else the text
    unchanged. A quoted number such as '"42"' therefore stays a string.
    """
    s = text.strip()
    if s == 'true':
        return True
    if s == 'false':
        return False
    if NUMBER_RE.match(s):
        try:
            if re.match(r'^[+-]?\d+$', s):
                return int(s)
            value = float(s)
            # 1e400 and friends overflow; keep them as text
            return value if math.isfinite(value) else s
        except ValueError:
            return s
    if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
        return s[1:-1]
    return s


def split_property_pairs(s: str) -> List[Tuple[str, str]]:
    """Split 'k: v, k2: v2' into (key, raw value) pairs.

    Commas inside double quotes or parentheses do not split. Each pair is
    split on its first colon so values like URLs keep their own colons.
    Pairs missing a key or a value are dropped.
    """
    if not isinstance(s, str):
        return []
    parts = []
    buf = []
    depth = 0
    in_quote = False
    for ch in s:
        if in_quote:
            buf.append(ch)
            if ch == '"':
                in_quote = False
        elif ch == '"':
            in_quote = True
            buf.append(ch)
        elif ch == '(':
            depth += 1
            buf.append(ch)
        elif ch == ')':
            if depth > 0:
                depth -= 1
            buf.append(ch)
        elif ch == ',' and depth == 0:
            parts.append(''.join(buf))
            buf = []
        else:
            buf.append(ch)
    if buf:
        parts.append(''.join(buf))

    pairs = []
    for part in parts:
        if ':' not in part:
            continue
        k, v = part.split(':', 1)
        k = k.strip()
        v = v.strip()
        if k and v:
            pairs.append((k, v))
    return pairs


def parse_properties(s: str) -> Dict[str, PropertyValue]:
    return {k: coerce_value(v) for k, v in split_property_pairs(s)}


def _get_indent(line: str) -> int:
    m = INDENT_RE.match(line)
    return len(m.group(1)) if m else 0


class Element:
    def __init__(
        self,
        type_: str,
        label: str = '',
        properties: Optional[Dict[str, PropertyValue]] = None,
        children: Optional[List['Element']] = None,
    ):
        self.type = type_
        self.label = label
        self.properties = properties or {}
        # None means "no children declared"; only containers ever get a list
        self.children = children

    @property
    def kind(self) -> str:
        return self.type.lower()

    def add_child(self, child: 'Element'):
        if self.children is None:
            self.children = []
        self.children.append(child)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def to_ir(self) -> Dict[str, Any]:
        ir: Dict[str, Any] = {
            'type': self.type,
            'label': self.label,
            'properties': dict(self.properties),
        }
        if self.children is not None:
            ir['children'] = [c.to_ir() for c in self.children]
        return ir

    def __repr__(self):
        return f"Element({self.type!r}, {self.label!r}, {self.properties!r})"


class Screen:
    def __init__(
        self,
        title: str = '',
        width: int = DEFAULT_SCREEN.width,
        height: int = DEFAULT_SCREEN.height,
        background_color: str = DEFAULT_SCREEN.background_color,
        elements: Optional[List[Element]] = None,
    ):
        self.title = title
        self.width = width
        self.height = height
        self.background_color = background_color
        self.elements = elements or []

    def to_ir(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'width': self.width,
            'height': self.height,
            'backgroundColor': self.background_color,
            'elements': [e.to_ir() for e in self.elements],
        }


def classify_line(line: str) -> str:
    """Return the kind of one SLML line (see the module-level line kinds)."""
    stripped = line.strip()
    if not stripped:
        return BLANK
    indent = _get_indent(line)
    if indent == 0 and stripped.startswith('#'):
        return COMMENT
    if stripped == 'screen:':
        return SCREEN_BLOCK
    if stripped == 'children:':
        return CHILDREN_MARKER
    if stripped.startswith('-'):
        return INLINE_ELEMENT
    if indent == 0 and BLOCK_ELEMENT_RE.match(stripped):
        return BLOCK_ELEMENT
    if indent > 0 and PROPERTY_RE.match(line):
        return PROPERTY
    return UNKNOWN


def parse_element_text(text: str) -> Optional[Element]:
    """Parse 'Type: label {k: v, ...}' (the part after the list dash).

    Returns None (after a warning) when the type/label separator is missing
    or the type is not a plain word.
    """
    colon = text.find(':')
    if colon == -1:
        warnings.warn(f"Invalid element format (missing ':'): {text}", UserWarning)
        return None
    type_ = text[:colon].strip()
    if not ELEMENT_TYPE_RE.match(type_):
        warnings.warn(f"Invalid element type '{type_}' in: {text}", UserWarning)
        return None
    rest = text[colon + 1 :].strip()
    m = INLINE_BODY_RE.match(rest)
    if m:
        label = m.group('label').strip()
        properties = parse_properties(m.group('props'))
    else:
        label = rest
        properties = {}
    return Element(type_, label, properties)


def _set_property(element: Element, key: str, raw: str):
    value = coerce_value(raw)
    if key == 'label':
        element.label = str(value)
    else:
        element.properties[key] = value


def _scan_block_body(lines: List[str], start: int, element: Element, base_indent: int) -> int:
    """Consume the property / children lines owned by a block-form element.

    Lines belong to the element while they are non-blank and indented deeper
    than base_indent. Child entries ('- type: label') recurse with the dash
    line's indentation as their base. Returns the index of the first line not
    consumed.
    """
    i = start
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            break
        indent = _get_indent(line)
        if indent <= base_indent:
            break
        kind = classify_line(line)
        if kind == CHILDREN_MARKER:
            if element.children is None:
                element.children = []
            i += 1
            continue
        if kind == INLINE_ELEMENT:
            m = INLINE_ELEMENT_RE.match(line)
            child = parse_element_text(m.group('body')) if m else None
            if child is None:
                i += 1
                continue
            element.add_child(child)
            i = _scan_block_body(lines, i + 1, child, indent)
            continue
        m = PROPERTY_RE.match(line)
        if m:
            _set_property(element, m.group('key'), m.group('value'))
        i += 1
    return i


class _TreeBuilder:
    """Places inline-form elements into the screen tree by indentation."""

    def __init__(self, root: List[Element]):
        self.root = root
        self.stack: List[Tuple[Element, int]] = []
        self.last_indent = 0

    def place(self, element: Element, indent: int):
        if indent > self.last_indent:
            if self.stack:
                self.stack[-1][0].add_child(element)
            else:
                warnings.warn(
                    f"Nested element '{element.type}' has no open container "
                    f"(only {', '.join(sorted(CONTAINER_KINDS))} accepts children); "
                    "attached to the screen",
                    UserWarning,
                )
                self.root.append(element)
        elif indent == self.last_indent:
            parent = None
            if self.stack and indent > 0:
                for anc, anc_indent in reversed(self.stack):
                    if anc_indent < indent:
                        parent = anc
                        break
            if parent is not None:
                parent.add_child(element)
            else:
                self.root.append(element)
        else:
            while self.stack and self.stack[-1][1] >= indent:
                self.stack.pop()
            if self.stack:
                self.stack[-1][0].add_child(element)
            else:
                self.root.append(element)

        if element.kind in CONTAINER_KINDS:
            self.stack.append((element, indent))
        self.last_indent = indent


def parse_elements(lines: List[str], defaults: ScreenDefaults = DEFAULT_SCREEN) -> List[Element]:
    """Build the element tree for the body lines of one SLML block."""
    elements: List[Element] = []
    builder = _TreeBuilder(elements)
    current: Optional[Element] = None
    i = 0
    while i < len(lines):
        line = lines[i]
        kind = classify_line(line)
        if kind == INLINE_ELEMENT:
            m = INLINE_ELEMENT_RE.match(line)
            element = parse_element_text(m.group('body')) if m else None
            if element is None:
                if not m:
                    warnings.warn(f"Invalid element line skipped: {line.strip()}", UserWarning)
                i += 1
                continue
            if 'align' not in element.properties and element.kind not in OWN_ALIGN_KINDS:
                element.properties['align'] = defaults.align
            builder.place(element, _get_indent(line))
            current = element
            i += 1
        elif kind == BLOCK_ELEMENT:
            m = BLOCK_ELEMENT_RE.match(line.strip())
            element = Element(m.group('type'), m.group('label').strip())
            elements.append(element)
            current = element
            i = _scan_block_body(lines, i + 1, element, 0)
        elif kind == PROPERTY and current is not None:
            m = PROPERTY_RE.match(line)
            _set_property(current, m.group('key'), m.group('value'))
            i += 1
        elif kind == UNKNOWN:
            warnings.warn(f"Unrecognized SLML line skipped: {line.strip()}", UserWarning)
            i += 1
        else:
            i += 1
    return elements


def _parse_dimension(value: Any, fallback: int, name: str) -> int:
    v = coerce_value(str(value)) if isinstance(value, str) else value
    if isinstance(v, bool) or not isinstance(v, (int, float)) or v <= 0:
        warnings.warn(f"Invalid screen {name} '{value}'; using {fallback}", UserWarning)
        return fallback
    return int(v)


def _apply_screen_property(screen: Screen, key: str, raw: str, defaults: ScreenDefaults):
    if key == 'title':
        screen.title = str(coerce_value(raw))
    elif key == 'width':
        screen.width = _parse_dimension(raw, defaults.width, 'width')
    elif key == 'height':
        screen.height = _parse_dimension(raw, defaults.height, 'height')
    elif key == 'size':
        m = SIZE_RE.match(raw)
        if m:
            screen.width = _parse_dimension(m.group(1), defaults.width, 'width')
            screen.height = _parse_dimension(m.group(2), defaults.height, 'height')
        else:
            warnings.warn(f"Invalid screen size '{raw}'; expected 'W, H'", UserWarning)
    elif key == 'backgroundColor':
        value = coerce_value(raw)
        if isinstance(value, str) and value:
            screen.background_color = value


def parse_screen_header(
    lines: List[str], defaults: ScreenDefaults = DEFAULT_SCREEN
) -> Tuple[Screen, int]:
    """Parse the leading header lines of a block.

    Returns the screen (elements not yet filled) and the index of the first
    body line. Leading '#' comments are skipped, the first one serving as the
    title when no header sets one.
    """
    screen = Screen(
        width=defaults.width,
        height=defaults.height,
        background_color=defaults.background_color,
    )
    comment_title = None
    i = 0
    while i < len(lines) and classify_line(lines[i]) in (BLANK, COMMENT):
        if classify_line(lines[i]) == COMMENT and comment_title is None:
            comment_title = lines[i].strip()[1:].strip()
        i += 1

    if i < len(lines):
        line = lines[i].strip()
        m = SCREEN_INLINE_RE.match(line)
        if m:
            rest = m.group('rest').strip()
            pm = SCREEN_PROPS_RE.match(rest)
            if pm:
                screen.title = pm.group('title').strip()
                for key, raw in split_property_pairs(pm.group('props')):
                    _apply_screen_property(screen, key, raw, defaults)
            else:
                screen.title = rest
            i += 1
        elif classify_line(lines[i]) == SCREEN_BLOCK:
            i += 1
            while i < len(lines):
                ln = lines[i]
                if not ln.strip() or _get_indent(ln) == 0:
                    break
                pm = PROPERTY_RE.match(ln)
                if pm:
                    _apply_screen_property(screen, pm.group('key'), pm.group('value').strip(), defaults)
                i += 1

    if not screen.title and comment_title:
        screen.title = comment_title
    return screen, i


def parse_slml(text: str, defaults: Optional[ScreenDefaults] = None) -> Screen:
    """Parse one SLML block into a Screen."""
    defaults = defaults or DEFAULT_SCREEN
    lines = (text or '').strip('\n').splitlines()
    screen, body_start = parse_screen_header(lines, defaults)
    screen.elements = parse_elements(lines[body_start:], defaults)
    return screen


def _format_value(value: PropertyValue) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return repr(value)
    # Quote anything that would otherwise coerce differently or break the pair grammar
    if (
        value == ''
        or value != value.strip()
        or coerce_value(value) != value
        or any(c in value for c in ',{}:')
    ):
        return f'"{value}"'
    return value


def _block_head_ok(type_: str) -> bool:
    # 'screen:' and 'children:' at column 0 are markers, not element heads
    return bool(BLOCK_ELEMENT_RE.match(f"{type_}:")) and type_ not in ('screen', 'children')


def _emit_block_body(el: Element, indent: int, out: List[str]):
    pad = ' ' * indent
    for k, v in el.properties.items():
        out.append(f"{pad}{k}: {_format_value(v)}")
    if el.children is not None:
        out.append(f"{pad}children:")
        for child in el.children:
            out.append(f"{pad}  - {child.type}:")
            if child.label:
                out.append(f"{pad}    label: \"{child.label}\"")
            _emit_block_body(child, indent + 4, out)


def _emit_inline(el: Element, depth: int, out: List[str]):
    line = f"{'  ' * depth}- {el.type}: {el.label}"
    if el.properties:
        props = ', '.join(f"{k}: {_format_value(v)}" for k, v in el.properties.items())
        line += f" {{{props}}}"
    out.append(line)
    for child in el.children or []:
        _emit_inline(child, depth + 1, out)


def serialize_screen(screen: Screen) -> str:
    """Render a Screen back to canonical SLML text.

    Elements are written in block form so that properties (including any
    injected align) are stated explicitly and labels are taken verbatim;
    re-parsing the output yields the same tree. Types that cannot head a
    block fall back to the inline form.
    """
    header = f"Screen: {screen.title}"
    header += (
        f" (width: {screen.width}, height: {screen.height}, "
        f"backgroundColor: {screen.background_color})"
    )
    out = [header]
    for el in screen.elements:
        if _block_head_ok(el.type):
            out.append(f"{el.type}: {el.label}".rstrip())
            _emit_block_body(el, 2, out)
        else:
            _emit_inline(el, 0, out)
    return '\n'.join(out) + '\n'
