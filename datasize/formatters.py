"""
Value and type formatters for exception messages.

Every error raised by the package embeds the offending object through fmt_value()
or fmt_type(), so messages stay short and readable even for objects with broken
or very long __repr__.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Literal

PRIMITIVE_TYPES = (
    type(None),
    bool,  # Comes before int (is subclass of int)
    int,
    float,
    str,
    bytes,
)

# Classes --------------------------------------------------------------------------------------------------------------

Style = Literal["ascii", "unicode-angle"]


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(
        obj: Any,
        *,
        style: Style = "ascii",
        max_repr: int = 120,
        fully_qualified: bool = False,
) -> str:
    """
    Format type information of an object or a type for exception messages.

    Args:
        obj: Any Python object or type.
        style: Display style, "ascii" for <int> or "unicode-angle" for ⟨int⟩.
        max_repr: Maximum length before truncation (applies to full type name).
        fully_qualified: Whether to include module name for non-builtin types.

    Returns:
        Formatted type string like "<int>" or "⟨Unit⟩".

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(Unit.BYTE, fully_qualified=True)
        '<datasize.units.Unit>'
    """
    type_name = class_name(obj, fully_qualified=fully_qualified)
    type_name = _fmt_truncate(type_name, max_repr, ellipsis=_fmt_ellipsis(style))
    return _fmt_type_value(type_name, style=style)


def fmt_value(
        obj: Any,
        *,
        style: Style = "ascii",
        max_repr: int = 120,
        label_primitives: bool = False,
) -> str:
    """
    Format a single value as a type–value pair for exception messages.

    Primitive values (int, float, str, ...) are shown bare unless label_primitives is set,
    everything else is labeled with its type name.

    Examples:
        >>> fmt_value(9999)
        '9999'
        >>> fmt_value(9999, label_primitives=True)
        '<int: 9999>'
        >>> fmt_value([1, 2, 3])
        '<list: [1, 2, 3]>'
    """
    repr_ = _safe_repr(obj)

    # Escape before truncation so the ellipsis is never escaped
    if style == "ascii":
        repr_ = repr_.replace(">", "\\>")

    repr_ = _fmt_truncate(repr_, max_repr, ellipsis=_fmt_ellipsis(style))

    if type(obj) in PRIMITIVE_TYPES and not label_primitives:
        return repr_

    return _fmt_type_value(type(obj).__name__, repr_, style=style)


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Class name of an object or of a class itself.

    Builtins are never qualified, so both `class_name(10)` and `class_name(int)` return 'int'.
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    if fully_qualified and cls.__module__ != "builtins":
        return f"{cls.__module__}.{cls.__name__}"
    return cls.__name__


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_ellipsis(style: Style) -> str:
    return "..." if style == "ascii" else "…"


def _fmt_truncate(repr_: str, max_len: int, ellipsis: str = "…") -> str:
    """
    Truncate repr_ to at most max_len visible characters before appending the ellipsis.

    Quoted reprs keep their quotes, with the ellipsis placed inside the closing quote.
    """
    if max_len <= 0:
        return ""
    if len(repr_) <= max_len:
        return repr_

    if len(repr_) >= 2 and repr_[0] in ("'", '"') and repr_[-1] == repr_[0]:
        quote = repr_[0]
        return f"{quote}{repr_[1:1 + max_len]}{ellipsis}{quote}"

    return repr_[:max(1, max_len)] + ellipsis


def _fmt_type_value(type_name: str, value_repr: str | None = None, *, style: Style = "ascii") -> str:
    """Combine a type name and a repr into a single display token according to style."""
    if style == "unicode-angle":
        return f"⟨{type_name}⟩" if value_repr is None else f"⟨{type_name}: {value_repr}⟩"
    return f"<{type_name}>" if value_repr is None else f"<{type_name}: {value_repr}>"


def _safe_repr(obj) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        return repr(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"
