"""Classic to modern control conversion.

ConversionEngine ties the dialect codec, the mappers and the category rules
together. Each engine holds one immutable MappingConfiguration; replacing it
swaps the whole snapshot, so engines with different tables can coexist.

Example:
    >>> engine = ConversionEngine()
    >>> output = engine.convert(
    ...     "- Button1:\\n"
    ...     "    Control: Classic/Button@2.2.0\\n"
    ...     "    Properties:\\n"
    ...     "      Text: =\\"Submit\\"\\n"
    ... )
    >>> print(output)
    - Button1:
        Control: Button@0.0.45
        Properties:
          Text: ="Submit"
          ButtonType: Standard
    <BLANKLINE>
"""

from dataclasses import dataclass
from typing import Any

from paconvert.core.errors import (
    ConversionError,
    UnsupportedControlTypeError,
    UnsupportedInputError,
)
from paconvert.core.log import get_logger
from paconvert.dialect import extract_control_info, parse_dialect, render_dialect
from paconvert.engine.log import ConversionLog, LogEntry
from paconvert.engine.rules import get_rule
from paconvert.mapping import (
    MappingConfiguration,
    PropertyMapper,
    TypeMapper,
    default_mappings,
)
from paconvert.model import ControlDocument, ControlNode

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one conversion.

    Attributes:
        output: Modern dialect text.
        document: The modern document that was rendered.
        log: Entries recorded during the conversion.
        classic_type: Type tag of the input control.
        modern_type: Resolved modern type tag.
    """

    output: str
    document: ControlDocument
    log: tuple[LogEntry, ...]
    classic_type: str
    modern_type: str


class ConversionEngine:
    """Converts classic control documents to the modern dialect.

    Attributes:
        mappings: The MappingConfiguration used by new conversions.
    """

    def __init__(
        self, mappings: MappingConfiguration | dict[str, Any] | None = None
    ):
        """Create an engine over ``mappings`` or the built-in tables.

        Raises:
            InvalidMappingConfigurationError: If ``mappings`` has the wrong
                shape.
        """
        if mappings is None:
            self._mappings = default_mappings()
        else:
            self._mappings = MappingConfiguration.from_data(mappings)
        self._last_log: tuple[LogEntry, ...] = ()

    @property
    def mappings(self) -> MappingConfiguration:
        return self._mappings

    @mappings.setter
    def mappings(self, value: MappingConfiguration | dict[str, Any]) -> None:
        self._mappings = MappingConfiguration.from_data(value)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def convert(self, input_text: str) -> str:
        """Convert classic dialect text to modern dialect text.

        Raises:
            UnsupportedInputError: If the text holds no control declaration.
            DialectParseError: If the text is not valid dialect YAML.
            UnsupportedControlTypeError: If the control type has no mapping.
        """
        return self.convert_with_log(input_text).output

    def convert_with_log(self, input_text: str) -> ConversionResult:
        """Convert and return the output together with its own log.

        Errors carry the partial log as ``error.log``.
        """
        log = ConversionLog()
        mappings = self._mappings

        try:
            result = self._convert(input_text, mappings, log)
        except ConversionError as exc:
            log.record(f"Error: {exc}")
            exc.attach_log(log.entries)
            self._last_log = log.entries
            logger.info(f"Conversion failed: {exc}")
            raise

        self._last_log = result.log
        return result

    def get_conversion_log(self) -> tuple[LogEntry, ...]:
        """Entries of the most recent conversion."""
        return self._last_log

    def _convert(
        self, input_text: str, mappings: MappingConfiguration, log: ConversionLog
    ) -> ConversionResult:
        log.record("Starting conversion")

        info = extract_control_info(input_text)
        if info is None:
            raise UnsupportedInputError("No control definition found in input")
        log.record(f"Found control {info.name} of type {info.full_type}")

        document = parse_dialect(input_text)
        if len(document) != 1:
            raise UnsupportedInputError(
                f"Expected exactly one control, found {len(document)}"
            )
        name, node = document.name, document.control
        classic_type = node.type_tag

        modern_type = TypeMapper(mappings).resolve(classic_type, log.record)
        if modern_type is None:
            log.record(f"Unsupported control type: {classic_type}")
            raise UnsupportedControlTypeError(classic_type)

        properties = PropertyMapper(mappings).map_properties(
            node.properties, modern_type, log.record
        )

        rule = get_rule(modern_type, classic_type)
        if rule is not None:
            rule(node.properties, properties, log.record)

        modern = ControlDocument.single(
            name,
            ControlNode(
                type_tag=modern_type,
                properties=properties,
                extras=dict(node.extras),
                key_order=list(node.key_order),
            ),
            as_sequence=document.as_sequence,
        )
        output = render_dialect(modern)
        log.record("Conversion completed")

        return ConversionResult(
            output=output,
            document=modern,
            log=log.entries,
            classic_type=classic_type,
            modern_type=modern_type,
        )

    # -------------------------------------------------------------------------
    # Mapping import/export
    # -------------------------------------------------------------------------

    def export_mappings(self) -> dict[str, Any]:
        """Current tables in the JSON import/export format."""
        return self._mappings.to_data()

    def import_mappings(
        self, data: dict[str, Any] | str, merge: bool = False
    ) -> MappingConfiguration:
        """Replace (or, with ``merge``, overlay) the current tables.

        Args:
            data: Mapping object or JSON text.
            merge: Layer the import over the current tables.

        Raises:
            InvalidMappingConfigurationError: If the data has the wrong shape.
        """
        if isinstance(data, str):
            imported = MappingConfiguration.from_json(data)
        else:
            imported = MappingConfiguration.from_data(data)

        self._mappings = self._mappings.merged(imported) if merge else imported
        logger.info(
            f"Imported mappings: {len(imported.control_types)} control types "
            f"(merge={merge})"
        )
        return self._mappings


# =============================================================================
# Samples
# =============================================================================

SAMPLES: dict[str, str] = {
    "button": """\
- Button1:
    Control: Classic/Button@2.2.0
    Properties:
      OnSelect: =Notify("Button clicked", NotificationType.Information)
      Text: ="Submit"
      X: =40
      Y: =200
      Width: =280
      Height: =40
      Fill: =RGBA(56, 96, 178, 1)
      Color: =RGBA(255, 255, 255, 1)
      DisabledFill: =RGBA(166, 166, 166, 1)
      BorderColor: =RGBA(0, 0, 0, 0)
      DisabledBorderColor: =RGBA(0, 0, 0, 0)
      BorderThickness: =0
      FocusedBorderThickness: =1
      DisplayMode: =DisplayMode.Edit
      RadiusTopLeft: =10
      RadiusTopRight: =10
""",
    "gallery": """\
- Gallery1:
    Control: Gallery@2.15.0
    Variant: BrowseLayout_Vertical_TwoTextOneImageVariant_ver5.0
    Properties:
      Items: =SampleCollection
      OnSelect: =Select(Self.Selected)
      X: =40
      Y: =100
      Width: =320
      Height: =400
      TemplateSize: =80
      TemplateFill: =RGBA(255, 255, 255, 1)
      BorderColor: =RGBA(225, 223, 221, 1)
      BorderThickness: =1
""",
    "form": """\
- Form1:
    Control: Form@2.4.4
    Properties:
      DataSource: =SampleTable
      Item: =First(SampleTable)
      DefaultMode: =FormMode.Edit
      OnSuccess: =Notify("Form submitted successfully", NotificationType.Success)
      X: =40
      Y: =100
      Width: =400
      Height: =550
      Fill: =RGBA(255, 255, 255, 1)
      BorderColor: =RGBA(225, 223, 221, 1)
      BorderThickness: =1
""",
}


def sample_classic_yaml(kind: str = "button") -> str:
    """Sample classic document for ``button``, ``gallery`` or ``form``.

    Raises:
        KeyError: If no sample exists for ``kind``.
    """
    key = kind.casefold()
    if key not in SAMPLES:
        available = ", ".join(SAMPLES)
        raise KeyError(f"Unknown sample '{kind}'. Available: {available}")
    return SAMPLES[key]


# =============================================================================
# Module-level interface
# =============================================================================

_default_engine: ConversionEngine | None = None


def get_engine() -> ConversionEngine:
    """Shared engine with the built-in tables, created on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ConversionEngine()
    return _default_engine


def convert(input_text: str, mappings: MappingConfiguration | None = None) -> str:
    """Convert with the shared engine, or a one-off engine for ``mappings``."""
    if mappings is not None:
        return ConversionEngine(mappings).convert(input_text)
    return get_engine().convert(input_text)


def get_conversion_log() -> tuple[LogEntry, ...]:
    """Log of the shared engine's most recent conversion."""
    return get_engine().get_conversion_log()


__all__ = [
    "ConversionEngine",
    "ConversionResult",
    "SAMPLES",
    "sample_classic_yaml",
    "get_engine",
    "convert",
    "get_conversion_log",
]
