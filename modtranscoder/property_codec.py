# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/property_codec.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Material property codec.

Converts between canonical tagged properties and the flat ``EditableRecord``
shape that editing widgets bind to, in both directions, plus the document-level
helpers that project a whole ``MateDocument`` into a ``MateForm`` and back.

The forward direction (``to_editable``) is lossless: numbers are copied as-is.
The reverse direction (``from_editable``) must cope with half-typed input, so
every numeric field goes through ``coerce`` and records that cannot be rebuilt
(``unknown`` tags, ``tex`` with an unrecognised sub-tag, records whose shape
fails validation) are dropped. Batch reconstruction reports every drop in
``PropertyBatchResult.omitted``.

Dispatch is table-driven: ``_ENCODERS`` and ``_DECODERS`` map each
``PropertyType`` to its converter, so adding a variant means adding one entry
to each table.

Examples:
    >>> rec = to_editable(ColProperty(prop_name="_Color", color=(255, 128, 0, 1.0)))
    >>> rec.to_flat()
    {'TypeName': 'col', 'propName': '_Color', 'colorR': 255.0, 'colorG': 128.0, 'colorB': 0.0, 'colorA': 1.0}
    >>> from_editable({"TypeName": "col", "propName": "_Color", "colorR": "12", "colorG": "x"}).color
    (12.0, 0.0, 0.0, 0.0)
    >>> from_editable({"TypeName": "unknown", "propName": "unknown"}) is None
    True
"""

# Standard
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

# Third-Party
from pydantic import ValidationError

# First-Party
from modtranscoder.coercion import coerce
from modtranscoder.errors import DocumentValidationError
from modtranscoder.models import (
    ColProperty,
    EditableRecord,
    FProperty,
    KeywordEntry,
    KeywordProperty,
    Material,
    MateDocument,
    MateForm,
    OmittedEntry,
    Property,
    PropertyBatchResult,
    PropertyType,
    RangeProperty,
    Tex2DSubProperty,
    TexOffsetProperty,
    TexProperty,
    TexRTSubProperty,
    TexScaleProperty,
    TexSubTag,
    VecProperty,
)
from modtranscoder.utils.error_formatter import ErrorFormatter

logger = logging.getLogger(__name__)

RecordLike = Union[EditableRecord, Mapping[str, Any]]


def _as_record(record: RecordLike) -> EditableRecord:
    """Accept either an ``EditableRecord`` or a plain widget mapping.

    Args:
        record: Record or mapping.

    Returns:
        EditableRecord: Validated record.

    Raises:
        ValidationError: If the record is not a mapping or a field has the
            wrong shape (a non-text ``TypeName``, ``keywords`` that is not a list).
    """
    if isinstance(record, EditableRecord):
        return record
    return EditableRecord.model_validate(dict(record) if isinstance(record, Mapping) else record)


def _text(value: Any) -> str:
    """Render an optional widget value as text.

    Args:
        value: Raw value, possibly None.

    Returns:
        str: ``""`` for None, else ``str(value)``.
    """
    return "" if value is None else str(value)


# =============================================================================
# Canonical -> editable
# =============================================================================


def _tex_to_editable(prop: TexProperty) -> EditableRecord:
    """Flatten a texture property.

    Args:
        prop: Texture property.

    Returns:
        EditableRecord: Record with the fields of its sub-tag populated.
    """
    record = EditableRecord(type_name=PropertyType.TEX.value, prop_name=prop.prop_name, sub_tag=prop.sub_tag.value)
    if prop.tex2d is not None:
        record.tex2d_name = prop.tex2d.name
        record.tex2d_path = prop.tex2d.path
        record.offset_x, record.offset_y = prop.tex2d.offset
        record.scale_x, record.scale_y = prop.tex2d.scale
    if prop.tex_rt is not None:
        record.discarded_str1 = prop.tex_rt.discarded_str1
        record.discarded_str2 = prop.tex_rt.discarded_str2
    return record


def _col_to_editable(prop: ColProperty) -> EditableRecord:
    r, g, b, a = prop.color
    return EditableRecord(type_name=prop.type_name, prop_name=prop.prop_name, color_r=r, color_g=g, color_b=b, color_a=a)


def _vec_to_editable(prop: VecProperty) -> EditableRecord:
    v0, v1, v2, v3 = prop.vector
    return EditableRecord(type_name=prop.type_name, prop_name=prop.prop_name, vec0=v0, vec1=v1, vec2=v2, vec3=v3)


def _number_to_editable(prop: Union[FProperty, RangeProperty]) -> EditableRecord:
    return EditableRecord(type_name=prop.type_name, prop_name=prop.prop_name, number=prop.number)


def _tex_offset_to_editable(prop: TexOffsetProperty) -> EditableRecord:
    return EditableRecord(type_name=prop.type_name, prop_name=prop.prop_name, offset_x=prop.offset_x, offset_y=prop.offset_y)


def _tex_scale_to_editable(prop: TexScaleProperty) -> EditableRecord:
    return EditableRecord(type_name=prop.type_name, prop_name=prop.prop_name, scale_x=prop.scale_x, scale_y=prop.scale_y)


def _keyword_to_editable(prop: KeywordProperty) -> EditableRecord:
    # count is recomputed on the way back, so it is not exposed for editing
    keywords = [{"key": kw.key, "value": kw.value} for kw in prop.keywords]
    return EditableRecord(type_name=prop.type_name, prop_name=prop.prop_name, keywords=keywords)


_ENCODERS: Dict[PropertyType, Callable[[Any], EditableRecord]] = {
    PropertyType.TEX: _tex_to_editable,
    PropertyType.COL: _col_to_editable,
    PropertyType.VEC: _vec_to_editable,
    PropertyType.F: _number_to_editable,
    PropertyType.RANGE: _number_to_editable,
    PropertyType.TEX_OFFSET: _tex_offset_to_editable,
    PropertyType.TEX_SCALE: _tex_scale_to_editable,
    PropertyType.KEYWORD: _keyword_to_editable,
}


def to_editable(prop: Property) -> EditableRecord:
    """Project one canonical property into its flat editable record.

    Args:
        prop: Any property variant.

    Returns:
        EditableRecord: Flat record; unsupported tags map to
        ``{TypeName: "unknown", propName: "unknown"}``.

    Examples:
        >>> to_editable(FProperty(prop_name="_Shininess", number=0.25)).to_flat()
        {'TypeName': 'f', 'propName': '_Shininess', 'number': 0.25}
        >>> from modtranscoder.models import UnknownProperty
        >>> to_editable(UnknownProperty(type_name="matrix", prop_name="_M")).to_flat()
        {'TypeName': 'unknown', 'propName': 'unknown'}
    """
    encoder = _ENCODERS.get(PropertyType.from_tag(getattr(prop, "type_name", None)))
    if encoder is None:
        return EditableRecord(type_name=PropertyType.UNKNOWN.value, prop_name="unknown")
    return encoder(prop)


def to_editable_list(properties: Iterable[Property]) -> List[EditableRecord]:
    """Project a property list, preserving order.

    Args:
        properties: Canonical properties.

    Returns:
        List[EditableRecord]: One record per property.
    """
    return [to_editable(prop) for prop in properties]


# =============================================================================
# Editable -> canonical
# =============================================================================


def _tex_from_editable(record: EditableRecord) -> Optional[TexProperty]:
    """Rebuild a texture property according to its sub-tag.

    Args:
        record: Flat record with ``TypeName == "tex"``.

    Returns:
        Optional[TexProperty]: None when the sub-tag is not recognised.
    """
    try:
        sub_tag = TexSubTag(record.sub_tag)
    except ValueError:
        return None

    prop_name = _text(record.prop_name)
    if sub_tag in (TexSubTag.TEX2D, TexSubTag.CUBE):
        tex2d = Tex2DSubProperty(
            name=_text(record.tex2d_name),
            path=_text(record.tex2d_path),
            offset=(coerce(record.offset_x, 0), coerce(record.offset_y, 0)),
            scale=(coerce(record.scale_x, 1), coerce(record.scale_y, 1)),
        )
        return TexProperty(prop_name=prop_name, sub_tag=sub_tag, tex2d=tex2d)
    if sub_tag is TexSubTag.TEX_RT:
        tex_rt = TexRTSubProperty(discarded_str1=_text(record.discarded_str1), discarded_str2=_text(record.discarded_str2))
        return TexProperty(prop_name=prop_name, sub_tag=sub_tag, tex_rt=tex_rt)
    return TexProperty(prop_name=prop_name, sub_tag=sub_tag)


def _col_from_editable(record: EditableRecord) -> ColProperty:
    color = (coerce(record.color_r, 0), coerce(record.color_g, 0), coerce(record.color_b, 0), coerce(record.color_a, 0))
    return ColProperty(prop_name=_text(record.prop_name), color=color)


def _vec_from_editable(record: EditableRecord) -> VecProperty:
    vector = (coerce(record.vec0, 0), coerce(record.vec1, 0), coerce(record.vec2, 0), coerce(record.vec3, 0))
    return VecProperty(prop_name=_text(record.prop_name), vector=vector)


def _f_from_editable(record: EditableRecord) -> FProperty:
    return FProperty(prop_name=_text(record.prop_name), number=coerce(record.number, 0))


def _range_from_editable(record: EditableRecord) -> RangeProperty:
    return RangeProperty(prop_name=_text(record.prop_name), number=coerce(record.number, 0))


def _tex_offset_from_editable(record: EditableRecord) -> TexOffsetProperty:
    return TexOffsetProperty(prop_name=_text(record.prop_name), offset_x=coerce(record.offset_x, 0), offset_y=coerce(record.offset_y, 0))


def _tex_scale_from_editable(record: EditableRecord) -> TexScaleProperty:
    return TexScaleProperty(prop_name=_text(record.prop_name), scale_x=coerce(record.scale_x, 0), scale_y=coerce(record.scale_y, 0))


def _keyword_entry(raw: Any) -> KeywordEntry:
    """Rebuild one keyword toggle from widget data.

    Args:
        raw: Mapping with ``key``/``value``, or anything else.

    Returns:
        KeywordEntry: ``value`` is True only for a real boolean True.

    Examples:
        >>> _keyword_entry({"key": "_ALPHATEST_ON", "value": True})
        KeywordEntry(key='_ALPHATEST_ON', value=True)
        >>> _keyword_entry({"key": "_X", "value": "true"})
        KeywordEntry(key='_X', value=False)
        >>> _keyword_entry(None)
        KeywordEntry(key='', value=False)
        >>> _keyword_entry({"key": 5, "value": True})
        KeywordEntry(key='5', value=True)
    """
    if not isinstance(raw, Mapping):
        return KeywordEntry()
    value = raw.get("value")
    return KeywordEntry(key=_text(raw.get("key")), value=value if isinstance(value, bool) else False)


def _keyword_from_editable(record: EditableRecord) -> KeywordProperty:
    keywords = [_keyword_entry(raw) for raw in record.keywords or []]
    return KeywordProperty(prop_name=_text(record.prop_name), keywords=keywords)


_DECODERS: Dict[PropertyType, Callable[[EditableRecord], Optional[Property]]] = {
    PropertyType.TEX: _tex_from_editable,
    PropertyType.COL: _col_from_editable,
    PropertyType.VEC: _vec_from_editable,
    PropertyType.F: _f_from_editable,
    PropertyType.RANGE: _range_from_editable,
    PropertyType.TEX_OFFSET: _tex_offset_from_editable,
    PropertyType.TEX_SCALE: _tex_scale_from_editable,
    PropertyType.KEYWORD: _keyword_from_editable,
}


def from_editable(record: RecordLike) -> Optional[Property]:
    """Rebuild one canonical property from a flat editable record.

    Numeric fields never fail: invalid text falls back to 0 (1 for texture
    scales). Records that cannot be reconstructed return None.

    Args:
        record: ``EditableRecord`` or plain widget mapping.

    Returns:
        Optional[Property]: The property, or None when it must be dropped.

    Raises:
        ValidationError: If a plain mapping does not have the shape of a record.

    Examples:
        >>> from_editable({"TypeName": "range", "propName": "_Cutoff", "number": "0.5"}).number
        0.5
        >>> from_editable({"TypeName": "tex", "propName": "_MainTex", "subTag": "bogus"}) is None
        True
        >>> from_editable({"TypeName": "keyword", "propName": "k", "count": 9, "keywords": [{"key": "A", "value": True}]}).count
        1
    """
    rec = _as_record(record)
    decoder = _DECODERS.get(PropertyType.from_tag(rec.type_name))
    if decoder is None:
        return None
    return decoder(rec)


def _omission_reason(record: EditableRecord) -> str:
    """Explain why a record could not be reconstructed.

    Args:
        record: Dropped record.

    Returns:
        str: Short reason.
    """
    if PropertyType.from_tag(record.type_name) is PropertyType.TEX:
        return f"unsupported texture sub-tag {record.sub_tag!r}"
    return f"unsupported property type {record.type_name!r}"


def from_editable_list(records: Iterable[RecordLike]) -> PropertyBatchResult:
    """Rebuild an ordered property list, dropping entries that cannot be rebuilt.

    A failing entry never aborts the batch; it is logged and reported in
    ``omitted`` with its position in the input.

    Args:
        records: Editable records in display order.

    Returns:
        PropertyBatchResult: Surviving properties in order plus omissions.

    Examples:
        >>> result = from_editable_list([
        ...     {"TypeName": "f", "propName": "_A", "number": "1"},
        ...     {"TypeName": "tex", "propName": "_B", "subTag": "bogus"},
        ...     {"TypeName": "vec", "propName": "_C", "vec0": 2},
        ... ])
        >>> [p.prop_name for p in result.properties]
        ['_A', '_C']
        >>> result.omitted[0].index, result.omitted[0].sub_tag
        (1, 'bogus')
    """
    result = PropertyBatchResult()
    for index, raw in enumerate(records):
        try:
            record = _as_record(raw)
            prop = from_editable(record)
        except ValidationError as exc:
            reason = ErrorFormatter.format_validation_error(exc)["message"]
            logger.warning("Dropping malformed property #%d: %s", index, reason)
            type_name = raw.get("TypeName") if isinstance(raw, Mapping) else None
            sub_tag = raw.get("subTag") if isinstance(raw, Mapping) else None
            result.omitted.append(
                OmittedEntry(
                    index=index,
                    type_name=None if type_name is None else str(type_name),
                    sub_tag=None if sub_tag is None else str(sub_tag),
                    reason=reason,
                )
            )
            continue
        if prop is None:
            reason = _omission_reason(record)
            logger.warning("Dropping property #%d (%s): %s", index, record.prop_name, reason)
            result.omitted.append(
                OmittedEntry(
                    index=index,
                    type_name=None if record.type_name is None else str(record.type_name),
                    sub_tag=None if record.sub_tag is None else str(record.sub_tag),
                    reason=reason,
                )
            )
            continue
        result.properties.append(prop)
    return result


# =============================================================================
# Document-level helpers
# =============================================================================


def mate_to_form(document: MateDocument) -> MateForm:
    """Project a material document into its editable form.

    Args:
        document: Canonical material document.

    Returns:
        MateForm: Header inputs plus one record per property.

    Examples:
        >>> doc = MateDocument(name="skin", material=Material(name="skin", shader_name="CM3D2/Toony_Lighted"))
        >>> form = mate_to_form(doc)
        >>> form.shader_name, form.properties
        ('CM3D2/Toony_Lighted', [])
    """
    material = document.material
    return MateForm(
        signature=document.signature,
        version=document.version,
        name=document.name,
        material_name=material.name,
        shader_name=material.shader_name,
        shader_filename=material.shader_filename,
        properties=to_editable_list(material.properties),
    )


def form_to_mate(form: Union[MateForm, Mapping[str, Any]], previous: MateDocument, allow_signature_edit: bool = False) -> Tuple[MateDocument, PropertyBatchResult]:
    """Rebuild a material document from its edited form.

    Signature and version are protected: they are only taken from the form
    when ``allow_signature_edit`` is set, and a version that is not a number
    keeps the previous value.

    Args:
        form: Edited form or plain mapping.
        previous: Document the form was projected from.
        allow_signature_edit: Whether header identity fields may change.

    Returns:
        Tuple[MateDocument, PropertyBatchResult]: New document and batch diagnostics.

    Raises:
        DocumentValidationError: If ``properties`` is present but not a list.

    Examples:
        >>> prev = MateDocument(name="a")
        >>> doc, res = form_to_mate({"name": "b", "signature": "X", "properties": []}, prev)
        >>> doc.name, doc.signature == prev.signature
        ('b', True)
        >>> doc, _ = form_to_mate({"signature": "X", "version": "2001"}, prev, allow_signature_edit=True)
        >>> doc.signature, doc.version
        ('X', 2001)
        >>> doc, res = form_to_mate({"properties": [{"TypeName": 7}, {"TypeName": "f", "propName": "_A"}]}, prev)
        >>> [p.prop_name for p in doc.material.properties], res.omitted[0].index
        (['_A'], 0)
    """
    if isinstance(form, MateForm):
        edited = form
        records: Any = form.properties
    else:
        # records are validated one by one so a bad entry only drops itself
        data = dict(form)
        records = data.pop("properties", None)
        if records is None:
            records = []
        elif not isinstance(records, list):
            raise DocumentValidationError(
                "Validation failed: properties must be a list",
                details=[{"field": "properties", "message": "properties must be a list"}],
            )
        edited = MateForm.model_validate(data)
    batch = from_editable_list(records)

    signature = previous.signature
    version = previous.version
    if allow_signature_edit:
        signature = _text(edited.signature) if edited.signature is not None else previous.signature
        version = int(coerce(edited.version, previous.version))

    material = Material(
        name=_text(edited.material_name),
        shader_name=_text(edited.shader_name),
        shader_filename=_text(edited.shader_filename),
        properties=batch.properties,
    )
    document = MateDocument(signature=signature, version=version, name=_text(edited.name), material=material)
    return document, batch
