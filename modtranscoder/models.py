# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models for canonical asset documents and their editable projections.

Canonical models use snake_case attributes and carry the PascalCase aliases of
the external document shape (``Args``, ``TypeName``, ``PropName`` ...). Always
serialize with ``by_alias=True``.

Material properties form a closed tagged union discriminated by ``TypeName``.
Tags that are not recognised validate into ``UnknownProperty`` instead of
failing, so a document from a newer game build still loads.

Examples:
    >>> cmd = Command.of("SetTex", "diffuse", "body01")
    >>> cmd.args, cmd.arg_count
    (['SetTex', 'diffuse', 'body01'], 3)
    >>> prop = PROPERTY_ADAPTER.validate_python({"TypeName": "f", "PropName": "_Shininess", "Number": 0.5})
    >>> type(prop).__name__, prop.number
    ('FProperty', 0.5)
    >>> PROPERTY_ADAPTER.validate_python({"TypeName": "matrix", "PropName": "_M"}).type_name
    'matrix'
"""

# Standard
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

# Third-Party
from pydantic import BaseModel, computed_field, ConfigDict, Discriminator, Field, field_validator, model_validator, Tag, TypeAdapter

MENU_SIGNATURE = "CM3D2_MENU"
MENU_VERSION = 1000
MATE_SIGNATURE = "CM3D2_MATERIAL"
MATE_VERSION = 1000

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

# Spellings used by older editor builds for the same tags
_TYPE_NAME_ALIASES: Dict[str, str] = {
    "texOffset": "tex_offset",
    "texScale": "tex_scale",
}

_NOTATION_ALIASES: Dict[str, str] = {
    "format1": "indented",
    "format2": "inline",
    "format3": "structured",
    "json": "structured",
}


class PropertyType(str, Enum):
    """Discriminator values of material properties."""

    TEX = "tex"
    COL = "col"
    VEC = "vec"
    F = "f"
    RANGE = "range"
    TEX_OFFSET = "tex_offset"
    TEX_SCALE = "tex_scale"
    KEYWORD = "keyword"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> Optional["PropertyType"]:
        """Resolve legacy camelCase spellings.

        Args:
            value: Raw tag.

        Returns:
            Matching member, or None to let Enum raise ValueError.

        Examples:
            >>> PropertyType("texOffset")
            <PropertyType.TEX_OFFSET: 'tex_offset'>
        """
        alias = _TYPE_NAME_ALIASES.get(value) if isinstance(value, str) else None
        return cls(alias) if alias else None

    @classmethod
    def from_tag(cls, tag: Any) -> "PropertyType":
        """Map any raw tag to a member, falling back to ``UNKNOWN``.

        Args:
            tag: Raw ``TypeName`` value, possibly ``None``.

        Returns:
            PropertyType: The matching member or ``UNKNOWN``.

        Examples:
            >>> PropertyType.from_tag("col")
            <PropertyType.COL: 'col'>
            >>> PropertyType.from_tag("bogus")
            <PropertyType.UNKNOWN: 'unknown'>
            >>> PropertyType.from_tag(None)
            <PropertyType.UNKNOWN: 'unknown'>
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


class TexSubTag(str, Enum):
    """Payload selector of a ``tex`` property."""

    TEX2D = "tex2d"
    CUBE = "cube"
    TEX_RT = "texRT"
    NULL = "null"


class Notation(str, Enum):
    """Textual notations for command lists."""

    INDENTED = "indented"  # command name, then tab-prefixed parameters
    INLINE = "inline"  # Name: p1, p2
    STRUCTURED = "structured"  # JSON list of {ArgCount, Args}

    @classmethod
    def _missing_(cls, value: object) -> Optional["Notation"]:
        """Accept the editor's ``format1``..``format3`` names.

        Args:
            value: Raw notation name.

        Returns:
            Matching member, or None to let Enum raise ValueError.

        Examples:
            >>> Notation("format2")
            <Notation.INLINE: 'inline'>
        """
        alias = _NOTATION_ALIASES.get(value) if isinstance(value, str) else None
        return cls(alias) if alias else None


class PropertyView(str, Enum):
    """How material properties are presented for editing."""

    FORM = "form"  # list of flat EditableRecord
    JSON = "json"  # whole document as structured text


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class _CanonicalModel(BaseModel):
    """Shared config: accept both attribute names and external aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Command(_CanonicalModel):
    """One free-form menu command; ``Args[0]`` is conventionally its name."""

    arg_count: Optional[int] = Field(None, alias="ArgCount")
    args: List[str] = Field(default_factory=list, alias="Args")

    @model_validator(mode="after")
    def _default_arg_count(self) -> "Command":
        """Derive ``ArgCount`` from ``Args`` when it was not supplied.

        Returns:
            Command: self
        """
        if self.arg_count is None:
            self.arg_count = len(self.args)
        return self

    @classmethod
    def of(cls, *args: str) -> "Command":
        """Build a command from positional arguments.

        Args:
            *args: Command name followed by its parameters.

        Returns:
            Command: New command with ``ArgCount == len(args)``.
        """
        return cls(args=list(args))


# ---------------------------------------------------------------------------
# Material properties
# ---------------------------------------------------------------------------


class Tex2DSubProperty(_CanonicalModel):
    """Texture reference payload for ``tex2d`` and ``cube`` sub-tags."""

    name: str = Field("", alias="Name")
    path: str = Field("", alias="Path")
    offset: Tuple[float, float] = Field((0.0, 0.0), alias="Offset")
    scale: Tuple[float, float] = Field((1.0, 1.0), alias="Scale")


class TexRTSubProperty(_CanonicalModel):
    """Opaque legacy strings carried by render-texture references."""

    discarded_str1: str = Field("", alias="DiscardedStr1")
    discarded_str2: str = Field("", alias="DiscardedStr2")


class TexProperty(_CanonicalModel):
    """Texture property; the payload present depends on ``SubTag``."""

    type_name: Literal["tex"] = Field("tex", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    sub_tag: TexSubTag = Field(alias="SubTag")
    tex2d: Optional[Tex2DSubProperty] = Field(None, alias="Tex2D")
    tex_rt: Optional[TexRTSubProperty] = Field(None, alias="TexRT")

    @model_validator(mode="after")
    def _check_payload(self) -> "TexProperty":
        """Reject payloads that do not belong to the sub-tag.

        Returns:
            TexProperty: self

        Raises:
            ValueError: If a payload is missing or belongs to another sub-tag.
        """
        if self.sub_tag in (TexSubTag.TEX2D, TexSubTag.CUBE):
            if self.tex2d is None or self.tex_rt is not None:
                raise ValueError(f"SubTag {self.sub_tag.value!r} requires Tex2D and no TexRT")
        elif self.sub_tag is TexSubTag.TEX_RT:
            if self.tex_rt is None or self.tex2d is not None:
                raise ValueError("SubTag 'texRT' requires TexRT and no Tex2D")
        elif self.tex2d is not None or self.tex_rt is not None:
            raise ValueError("SubTag 'null' carries no payload")
        return self


class ColProperty(_CanonicalModel):
    """RGBA color; the editor shows r/g/b as 0-255 and a as 0-1."""

    type_name: Literal["col"] = Field("col", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    color: Tuple[float, float, float, float] = Field((0.0, 0.0, 0.0, 0.0), alias="Color")


class VecProperty(_CanonicalModel):
    """Four-component vector."""

    type_name: Literal["vec"] = Field("vec", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    vector: Tuple[float, float, float, float] = Field((0.0, 0.0, 0.0, 0.0), alias="Vector")


class FProperty(_CanonicalModel):
    """Scalar float."""

    type_name: Literal["f"] = Field("f", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    number: float = Field(0.0, alias="Number")


class RangeProperty(_CanonicalModel):
    """Scalar constrained by the shader to a slider range."""

    type_name: Literal["range"] = Field("range", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    number: float = Field(0.0, alias="Number")


def _normalize_type_name(value: Any) -> Any:
    """Rewrite legacy tag spellings before literal validation.

    Args:
        value: Raw ``TypeName``.

    Returns:
        The canonical spelling when known, else the input unchanged.
    """
    if isinstance(value, str):
        return _TYPE_NAME_ALIASES.get(value, value)
    return value


class TexOffsetProperty(_CanonicalModel):
    """Texture UV offset."""

    type_name: Literal["tex_offset"] = Field("tex_offset", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    offset_x: float = Field(0.0, alias="OffsetX")
    offset_y: float = Field(0.0, alias="OffsetY")

    @field_validator("type_name", mode="before")
    @classmethod
    def _normalize_tag(cls, value: Any) -> Any:
        """Accept the legacy camelCase tag.

        Args:
            value: Raw TypeName.

        Returns:
            Canonical tag spelling.
        """
        return _normalize_type_name(value)


class TexScaleProperty(_CanonicalModel):
    """Texture UV scale."""

    type_name: Literal["tex_scale"] = Field("tex_scale", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    scale_x: float = Field(0.0, alias="ScaleX")
    scale_y: float = Field(0.0, alias="ScaleY")

    @field_validator("type_name", mode="before")
    @classmethod
    def _normalize_tag(cls, value: Any) -> Any:
        """Accept the legacy camelCase tag.

        Args:
            value: Raw TypeName.

        Returns:
            Canonical tag spelling.
        """
        return _normalize_type_name(value)


class KeywordEntry(_CanonicalModel):
    """One shader keyword toggle."""

    key: str = Field("", alias="Key")
    value: bool = Field(False, alias="Value")


class KeywordProperty(_CanonicalModel):
    """Ordered shader keyword flags; ``Count`` is always derived."""

    type_name: Literal["keyword"] = Field("keyword", alias="TypeName")
    prop_name: str = Field("", alias="PropName")
    keywords: List[KeywordEntry] = Field(default_factory=list, alias="Keywords")

    @computed_field(alias="Count")  # type: ignore[prop-decorator]
    @property
    def count(self) -> int:
        """Number of keywords.

        Returns:
            int: ``len(keywords)``
        """
        return len(self.keywords)


class UnknownProperty(_CanonicalModel):
    """Sentinel for unsupported tags; keeps the original tag for reporting."""

    type_name: str = Field("unknown", alias="TypeName")
    prop_name: str = Field("", alias="PropName")


def _property_tag(value: Any) -> str:
    """Pick the union member for raw input or an existing model instance.

    Args:
        value: Dict from JSON or a property model.

    Returns:
        str: Tag of the union member to validate against.

    Examples:
        >>> _property_tag({"TypeName": "vec"})
        'vec'
        >>> _property_tag({"TypeName": "texScale"})
        'tex_scale'
        >>> _property_tag({"PropName": "_x"})
        'unknown'
    """
    if isinstance(value, dict):
        raw = value.get("TypeName", value.get("type_name"))
    else:
        raw = getattr(value, "type_name", None)
    return PropertyType.from_tag(raw).value


Property = Annotated[
    Union[
        Annotated[TexProperty, Tag("tex")],
        Annotated[ColProperty, Tag("col")],
        Annotated[VecProperty, Tag("vec")],
        Annotated[FProperty, Tag("f")],
        Annotated[RangeProperty, Tag("range")],
        Annotated[TexOffsetProperty, Tag("tex_offset")],
        Annotated[TexScaleProperty, Tag("tex_scale")],
        Annotated[KeywordProperty, Tag("keyword")],
        Annotated[UnknownProperty, Tag("unknown")],
    ],
    Discriminator(_property_tag),
]

PROPERTY_ADAPTER: TypeAdapter = TypeAdapter(Property)
PROPERTY_LIST_ADAPTER: TypeAdapter = TypeAdapter(List[Property])
COMMAND_LIST_ADAPTER: TypeAdapter = TypeAdapter(List[Command])


# ---------------------------------------------------------------------------
# Editable projection
# ---------------------------------------------------------------------------


class EditableRecord(BaseModel):
    """Flat, widget-shaped view of one property.

    Holds the union of every variant's fields with only the ones relevant to
    ``TypeName`` populated. Values are left untyped so half-edited text
    survives until ``from_editable`` coerces it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type_name: Optional[str] = Field("unknown", alias="TypeName")
    prop_name: Any = Field(None, alias="propName")
    sub_tag: Any = Field(None, alias="subTag")
    tex2d_name: Any = Field(None, alias="tex2dName")
    tex2d_path: Any = Field(None, alias="tex2dPath")
    offset_x: Any = Field(None, alias="offsetX")
    offset_y: Any = Field(None, alias="offsetY")
    scale_x: Any = Field(None, alias="scaleX")
    scale_y: Any = Field(None, alias="scaleY")
    discarded_str1: Any = Field(None, alias="discardedStr1")
    discarded_str2: Any = Field(None, alias="discardedStr2")
    color_r: Any = Field(None, alias="colorR")
    color_g: Any = Field(None, alias="colorG")
    color_b: Any = Field(None, alias="colorB")
    color_a: Any = Field(None, alias="colorA")
    vec0: Any = Field(None, alias="vec0")
    vec1: Any = Field(None, alias="vec1")
    vec2: Any = Field(None, alias="vec2")
    vec3: Any = Field(None, alias="vec3")
    number: Any = Field(None, alias="number")
    keywords: Optional[List[Any]] = Field(None, alias="keywords")

    def to_flat(self) -> Dict[str, Any]:
        """Return only the populated fields, keyed the way widgets expect.

        Returns:
            Dict[str, Any]: Flat mapping without unset fields.

        Examples:
            >>> EditableRecord(TypeName="f", propName="_A", number=1.5).to_flat()
            {'TypeName': 'f', 'propName': '_A', 'number': 1.5}
        """
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class MenuDocument(_CanonicalModel):
    """A ``.menu`` file: header fields plus the ordered command list."""

    signature: str = Field(MENU_SIGNATURE, alias="Signature")
    body_size: int = Field(0, alias="BodySize")
    version: int = Field(MENU_VERSION, alias="Version")
    src_file_name: str = Field("", alias="SrcFileName")
    item_name: str = Field("", alias="ItemName")
    category: str = Field("", alias="Category")
    info_text: str = Field("", alias="InfoText")
    commands: List[Command] = Field(default_factory=list, alias="Commands")


class Material(_CanonicalModel):
    """Shader binding and parameter list of a material."""

    name: str = Field("", alias="Name")
    shader_name: str = Field("", alias="ShaderName")
    shader_filename: str = Field("", alias="ShaderFilename")
    properties: List[Property] = Field(default_factory=list, alias="Properties")


class MateDocument(_CanonicalModel):
    """A ``.mate`` file."""

    signature: str = Field(MATE_SIGNATURE, alias="Signature")
    version: int = Field(MATE_VERSION, alias="Version")
    name: str = Field("", alias="Name")
    material: Material = Field(default_factory=Material, alias="Material")


class MateForm(BaseModel):
    """Editable projection of a ``MateDocument``: header inputs plus records."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    signature: Any = None
    version: Any = None
    name: Any = None
    material_name: Any = Field(None, alias="materialName")
    shader_name: Any = Field(None, alias="shaderName")
    shader_filename: Any = Field(None, alias="shaderFilename")
    properties: List[EditableRecord] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Reconstruction diagnostics
# ---------------------------------------------------------------------------


class OmittedEntry(BaseModel):
    """An editable record that could not be turned back into a property."""

    index: int
    type_name: Optional[str] = None
    sub_tag: Optional[str] = None
    reason: str


class PropertyBatchResult(BaseModel):
    """Reconstructed properties plus what was dropped on the way."""

    properties: List[Property] = Field(default_factory=list)
    omitted: List[OmittedEntry] = Field(default_factory=list)

    @property
    def has_omissions(self) -> bool:
        """Whether any record was dropped.

        Returns:
            bool: True when ``omitted`` is non-empty.
        """
        return bool(self.omitted)
