from pressroom.transforms.base import Transform
from pressroom.transforms.dark_mode import (
    DarkModeConverter,
    DarkModeTransform,
    clear_conversion_cache,
    convert_css_to_dark_mode,
)
from pressroom.transforms.inline_vars import resolve_inline_style_variables
from pressroom.transforms.remap import convert_color
from pressroom.transforms.variable_expansion import VariableExpansionTransform, expand_css_variables

BUILTIN_TRANSFORMS = [
    VariableExpansionTransform(),
]


def apply_transforms(css, dark=False, custom_transforms=None, converter=None):
    """Expand variables in *css*, then convert to dark mode when *dark* is set.

    Any *custom_transforms* run last, in order.
    """
    transforms = list(BUILTIN_TRANSFORMS)
    if dark:
        transforms.append(DarkModeTransform(converter))
    if custom_transforms:
        transforms.extend(custom_transforms)
    for t in transforms:
        css = t.apply(css)
    return css


__all__ = [
    "Transform",
    "BUILTIN_TRANSFORMS",
    "apply_transforms",
    "VariableExpansionTransform",
    "DarkModeTransform",
    "DarkModeConverter",
    "expand_css_variables",
    "convert_css_to_dark_mode",
    "clear_conversion_cache",
    "resolve_inline_style_variables",
    "convert_color",
]
