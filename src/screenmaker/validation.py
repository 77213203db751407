from dataclasses import dataclass
from typing import List, Sequence

from .generation.elements import ELEMENT_RENDERERS
from .generation.layout import DOCKED_KINDS
from .parser import CONTAINER_KINDS, Element, Screen


@dataclass
class ValidationIssue:
    path: str
    message: str
    severity: str = "error"  # 'error' | 'warn'


@dataclass
class ValidationResult:
    issues: List[ValidationIssue]

    def ok(self) -> bool:
        return all(i.severity != 'error' for i in self.issues)


KNOWN_KINDS = frozenset(ELEMENT_RENDERERS) | frozenset(DOCKED_KINDS) | {'bottomnavigationitem'}


def _validate_element(el: Element, epath: str, issues: List[ValidationIssue], parent_kind=None):
    kind = el.kind
    if kind not in KNOWN_KINDS:
        issues.append(
            ValidationIssue(
                path=epath,
                message=f"Unknown element type '{el.type}' (rendered as placeholder)",
                severity='warn',
            )
        )
    if parent_kind == 'bottomnavigationbar' and kind != 'bottomnavigationitem':
        issues.append(
            ValidationIssue(
                path=epath,
                message=f"Bottom navigation child should be bottomNavigationItem, got '{el.type}'",
                severity='warn',
            )
        )
    if el.children is not None and kind not in CONTAINER_KINDS:
        issues.append(
            ValidationIssue(
                path=f"{epath}/children",
                message=f"Element type '{el.type}' does not render children",
                severity='warn',
            )
        )
    if kind == 'bottomnavigationbar' and not el.children:
        issues.append(
            ValidationIssue(
                path=epath, message="Bottom navigation bar has no items", severity='warn'
            )
        )
    for cidx, child in enumerate(el.children or []):
        _validate_element(child, f"{epath}/children/{cidx}", issues, kind)


def validate_screen(screen: Screen, path: str = "/screens/0") -> ValidationResult:
    """Check a parsed screen for problems the renderer silently tolerates."""
    issues: List[ValidationIssue] = []
    for dim in ('width', 'height'):
        value = getattr(screen, dim)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            issues.append(
                ValidationIssue(path=f"{path}/{dim}", message=f"Screen {dim} must be positive")
            )
    seen_docked = set()
    for eidx, el in enumerate(screen.elements):
        epath = f"{path}/elements/{eidx}"
        if el.kind in DOCKED_KINDS:
            if el.kind in seen_docked:
                issues.append(
                    ValidationIssue(
                        path=epath,
                        message=f"Duplicate {el.type} ignored; only the first one is rendered",
                        severity='warn',
                    )
                )
            seen_docked.add(el.kind)
        _validate_element(el, epath, issues)
    return ValidationResult(issues)


def validate_screens(screens: Sequence[Screen]) -> ValidationResult:
    if not screens:
        return ValidationResult(
            [ValidationIssue(path="/screens", message="No SLML blocks found")]
        )
    issues: List[ValidationIssue] = []
    for idx, screen in enumerate(screens):
        issues.extend(validate_screen(screen, f"/screens/{idx}").issues)
    return ValidationResult(issues)
