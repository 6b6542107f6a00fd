"""Built-in classic to modern mapping tables.

Keys of CONTROL_TYPES are classic type tokens (versioned, bare or the
lowercase names older exports used). Keys of PROPERTIES and DEFAULTS are
modern type tokens; ``"*"`` is the common property table used for modern
types without a table of their own.
"""

COMMON_TABLE_KEY = "*"

# =============================================================================
# Control Types
# =============================================================================

CONTROL_TYPES: dict[str, str] = {
    # Basic controls
    "Classic/Button@2.2.0": "Button@0.0.45",
    "Classic/Button": "Button@0.0.45",
    "Label@2.5.1": "Text@0.0.51",
    "Label": "Text@0.0.51",
    "HtmlViewer@2.1.0": "Text@0.0.51",
    "Image@2.2.3": "Image@2.2.3",
    "Rectangle@2.3.0": "Rectangle@2.3.0",
    # Input controls
    "Classic/TextInput@2.3.2": "TextInput@0.0.54",
    "Classic/TextInput": "TextInput@0.0.54",
    "Classic/DropDown@2.3.1": "DropDown@0.0.44",
    "Classic/DropDown": "DropDown@0.0.44",
    "Classic/ComboBox@2.4.0": "ComboBox@0.0.51",
    "Classic/ComboBox": "ComboBox@0.0.51",
    "Classic/CheckBox@2.1.0": "Checkbox@0.0.30",
    "Classic/CheckBox": "Checkbox@0.0.30",
    "Classic/Toggle@2.1.0": "Toggle@1.1.5",
    "Classic/Toggle": "Toggle@1.1.5",
    "Classic/Radio@2.3.0": "Radio@0.0.25",
    "Classic/Radio": "Radio@0.0.25",
    "Classic/Slider@2.1.0": "Slider@1.0.32",
    "Classic/Slider": "Slider@1.0.32",
    "Classic/DatePicker@2.6.0": "DatePicker@0.0.46",
    "Classic/DatePicker": "DatePicker@0.0.46",
    "Classic/Rating@2.1.0": "Rating@0.0.7",
    "Classic/Rating": "Rating@0.0.7",
    # Layout and data controls
    "Gallery@2.15.0": "Gallery@2.15.0",
    "Gallery": "Gallery@2.15.0",
    "Form@2.4.4": "Form@2.4.4",
    "Form": "Form@2.4.4",
    "DataTable@1.0.1": "Table@1.0.278",
    "DataTable": "Table@1.0.278",
    "GroupContainer@1.3.0": "GroupContainer@1.3.0",
    "GroupContainer": "GroupContainer@1.3.0",
    # Names used by older exports
    "button": "Button@0.0.45",
    "label": "Text@0.0.51",
    "text": "Text@0.0.51",
    "htmltext": "Text@0.0.51",
    "image": "Image@2.2.3",
    "rectangle": "Rectangle@2.3.0",
    "textbox": "TextInput@0.0.54",
    "textinput": "TextInput@0.0.54",
    "dropdown": "DropDown@0.0.44",
    "combobox": "ComboBox@0.0.51",
    "checkbox": "Checkbox@0.0.30",
    "toggle": "Toggle@1.1.5",
    "radio": "Radio@0.0.25",
    "slider": "Slider@1.0.32",
    "datepicker": "DatePicker@0.0.46",
    "rating": "Rating@0.0.7",
    "gallery": "Gallery@2.15.0",
    "datatable": "Table@1.0.278",
    "form": "Form@2.4.4",
    "container": "GroupContainer@1.3.0",
}

# =============================================================================
# Properties
# =============================================================================

# Classic-only visual states that modern controls derive from their theme.
_STATE_STYLING: dict[str, str | None] = {
    "DisabledFill": None,
    "HoverFill": None,
    "PressedFill": None,
    "DisabledBorderColor": None,
    "HoverBorderColor": None,
    "PressedBorderColor": None,
    "DisabledColor": None,
    "HoverColor": None,
    "PressedColor": None,
    "FocusedBorderColor": None,
    "FocusedBorderThickness": None,
}

PROPERTIES: dict[str, dict[str, str | None]] = {
    COMMON_TABLE_KEY: {
        **_STATE_STYLING,
        "Size": "FontSize",
        "Color": "FontColor",
        "Italic": "FontItalic",
        "Underline": "FontUnderline",
        "Strikethrough": "FontStrikethrough",
    },
    "Button": {
        **_STATE_STYLING,
        "Fill": "BasePaletteColor",
        "Color": "FontColor",
        "Size": "FontSize",
        "Italic": "FontItalic",
        "Underline": "FontUnderline",
        "Strikethrough": "FontStrikethrough",
        "RadiusTopLeft": "BorderRadius.TopLeft",
        "RadiusTopRight": "BorderRadius.TopRight",
        "RadiusBottomLeft": "BorderRadius.BottomLeft",
        "RadiusBottomRight": "BorderRadius.BottomRight",
        "Wrap": None,
        "VerticalAlign": None,
    },
    "Text": {
        **_STATE_STYLING,
        "Color": "FontColor",
        "Size": "Size",
        "Italic": "FontItalic",
        "Underline": "FontUnderline",
        "Strikethrough": "FontStrikethrough",
        "Wrap": "Wrap",
        "Overflow": None,
        "LineHeight": None,
        "AutoHeight": "AutoHeight",
    },
    "TextInput": {
        **_STATE_STYLING,
        "Default": "Value",
        "HintText": "Placeholder",
        "Color": "FontColor",
        "Size": "FontSize",
        "Italic": "FontItalic",
        "Clear": None,
        "EnableSpellCheck": None,
        "RadiusTopLeft": "BorderRadius",
        "RadiusTopRight": None,
        "RadiusBottomLeft": None,
        "RadiusBottomRight": None,
    },
    "DropDown": {
        **_STATE_STYLING,
        "Default": "DefaultSelectedItems",
        "Selected": "SelectedItem",
        "AllowEmptySelection": None,
        "ChevronBackground": None,
        "ChevronFill": None,
        "Color": "FontColor",
        "Size": "FontSize",
    },
    "ComboBox": {
        **_STATE_STYLING,
        "DefaultSelectedItems": "DefaultSelectedItems",
        "Selected": "SelectedItem",
        "SelectMultiple": "SelectMultiple",
        "SearchFields": "SearchFields",
        "InputTextPlaceholder": "Placeholder",
        "ChevronBackground": None,
        "ChevronFill": None,
        "Color": "FontColor",
        "Size": "FontSize",
    },
    "Checkbox": {
        **_STATE_STYLING,
        "Default": "Checked",
        "Text": "Label",
        "CheckboxSize": None,
        "CheckmarkFill": "CheckmarkColor",
        "Color": "FontColor",
        "Size": "FontSize",
    },
    "Toggle": {
        **_STATE_STYLING,
        "Default": "Checked",
        "TrueText": "Label",
        "FalseText": None,
        "ShowLabel": None,
        "HandleFill": None,
        "TrueFill": "CheckedColor",
        "FalseFill": None,
    },
    "Radio": {
        **_STATE_STYLING,
        "Default": "DefaultSelectedItems",
        "Selected": "SelectedItem",
        "RadioSize": None,
        "RadioSelectionFill": None,
        "Color": "FontColor",
        "Size": "FontSize",
    },
    "Slider": {
        **_STATE_STYLING,
        "Default": "Value",
        "Min": "Min",
        "Max": "Max",
        "HandleFill": None,
        "RailFill": None,
        "ValueFill": None,
    },
    "DatePicker": {
        **_STATE_STYLING,
        "DefaultDate": "SelectedDate",
        "Format": "Format",
        "IconFill": None,
        "IconBackground": None,
        "Color": "FontColor",
        "Size": "FontSize",
    },
    "Gallery": {
        "TemplateFill": "TemplateFill",
        "TemplateSize": "TemplateSize",
        "TemplatePadding": "TemplatePadding",
        "WrapCount": "WrapCount",
        "ShowNavigation": "ShowNavigation",
        "ShowScrollbar": "ShowScrollbar",
        "Selected": "Selected",
    },
    "Form": {
        "DefaultMode": "FormMode",
        "DataSource": "DataSource",
        "Item": "Item",
        "Columns": "Columns",
    },
    "Table": {
        **_STATE_STYLING,
        "Items": "Items",
        "Selected": "Selected",
        "HeadingFill": "HeaderColor",
        "HeadingColor": "HeaderFontColor",
    },
}

# =============================================================================
# Defaults
# =============================================================================

DEFAULTS: dict[str, dict[str, object]] = {
    "Button": {"ButtonType": "Standard"},
    "TextInput": {"Mode": "=TextMode.SingleLine"},
    "Form": {"FormMode": "Edit"},
    "Gallery": {"Layout": "Vertical"},
}


__all__ = ["COMMON_TABLE_KEY", "CONTROL_TYPES", "PROPERTIES", "DEFAULTS"]
