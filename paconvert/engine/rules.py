"""Category-specific structural rules.

Rules run after property mapping and patch the modern property table in
place. Each is registered under one or more control categories: the bare
type lowercased, without a ``Classic/`` prefix (``button``, ``textinput``).
The engine looks a rule up by the resolved modern type first, then by the
classic type.
"""

from typing import Callable

from paconvert.model import PropertyValue, ValueKind, split_type_token

Recorder = Callable[[str], None]
Rule = Callable[
    [dict[str, PropertyValue | None], dict[str, PropertyValue], Recorder], None
]

BORDER_RADIUS = "BorderRadius"
RADIUS_CORNERS = {
    "RadiusTopLeft": "TopLeft",
    "RadiusTopRight": "TopRight",
    "RadiusBottomLeft": "BottomLeft",
    "RadiusBottomRight": "BottomRight",
}

# Rule registry - populated by the decorators below
_registry: dict[str, Rule] = {}


def register_rule(*categories: str) -> Callable[[Rule], Rule]:
    """Register a rule for one or more categories.

    Example:
        >>> @register_rule("slider")
        ... def slider_rule(classic, modern, record):
        ...     ...
    """

    def decorator(rule: Rule) -> Rule:
        for category in categories:
            _registry[category.casefold()] = rule
        return rule

    return decorator


def control_category(type_token: str) -> str:
    """Category key for a type token: ``Classic/Button@2.2.0`` -> ``button``."""
    bare, _ = split_type_token(type_token)
    return bare.rsplit("/", 1)[-1].casefold()


def get_rule(modern_type: str, classic_type: str | None = None) -> Rule | None:
    """Rule for the modern type, else for the classic type, else None."""
    for token in (modern_type, classic_type):
        if token:
            rule = _registry.get(control_category(token))
            if rule is not None:
                return rule
    return None


def list_rules() -> list[str]:
    return sorted(_registry)


def _ensure(
    modern: dict[str, PropertyValue], key: str, default: str, record: Recorder
) -> None:
    if key not in modern:
        modern[key] = PropertyValue.string(default)
        record(f"Added {key} property: {default}")


# =============================================================================
# Rules
# =============================================================================


@register_rule("button")
def button_rule(classic, modern, record) -> None:
    record("Applying button-specific rules")
    _ensure(modern, "ButtonType", "Standard", record)
    consolidate_border_radius(modern, record)


@register_rule("gallery")
def gallery_rule(classic, modern, record) -> None:
    record("Applying gallery-specific rules")
    _ensure(modern, "Layout", "Vertical", record)


@register_rule("form")
def form_rule(classic, modern, record) -> None:
    record("Applying form-specific rules")
    _ensure(modern, "FormMode", "Edit", record)


@register_rule("textinput", "textbox")
def text_input_rule(classic, modern, record) -> None:
    record("Applying text input-specific rules")
    hint = classic.get("HintText")
    if hint is not None and "Placeholder" not in modern:
        modern["Placeholder"] = hint
        record("Converted HintText to Placeholder")


def consolidate_border_radius(
    modern: dict[str, PropertyValue], record: Recorder
) -> None:
    """Fold ``Radius*`` corner properties into one ``BorderRadius`` object.

    Corners already present in a ``BorderRadius`` object win; missing
    corners become 0. A scalar ``BorderRadius`` is left as it is and only
    the corner properties are removed.
    """
    sources = [key for key in RADIUS_CORNERS if key in modern]
    existing = modern.get(BORDER_RADIUS)

    if existing is not None and not existing.is_object:
        if sources:
            for key in sources:
                del modern[key]
            record("Kept existing BorderRadius, removed corner radius properties")
        return

    current = dict(existing.value) if existing is not None else {}
    complete = all(corner in current for corner in RADIUS_CORNERS.values())
    if not sources and (existing is None or complete):
        return

    record("Converting border radius properties")
    corners: dict[str, PropertyValue | None] = {}
    for source, corner in RADIUS_CORNERS.items():
        value = modern.pop(source, None)
        if current.get(corner) is not None:
            corners[corner] = current[corner]
        elif value is not None:
            corners[corner] = value
        else:
            corners[corner] = PropertyValue(ValueKind.NUMBER, 0)
    for key, value in current.items():
        corners.setdefault(key, value)

    modern[BORDER_RADIUS] = PropertyValue(ValueKind.OBJECT, corners)


__all__ = [
    "BORDER_RADIUS",
    "RADIUS_CORNERS",
    "register_rule",
    "control_category",
    "get_rule",
    "list_rules",
    "consolidate_border_radius",
]
