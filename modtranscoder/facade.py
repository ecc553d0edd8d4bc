# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/facade.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Editing sessions over one open document.

A transcoder holds exactly one canonical document and the active notation (or
view) for it. Text or records handed out by ``render`` are projections; the
canonical slot is only ever replaced wholesale by a successful ``commit``. A
failed commit raises and leaves the previous document in place, so an
in-progress invalid edit never corrupts the session.

- ``CommandTranscoder``: a ``MenuDocument`` edited as text in one of the
  command notations.
- ``PropertyTranscoder``: a ``MateDocument`` edited either as a form of flat
  records or as whole-document JSON text.

Each instance is scoped to a single document and is not shared across threads.

Examples:
    >>> from modtranscoder.models import Command, MenuDocument
    >>> session = CommandTranscoder(MenuDocument(commands=[Command.of("Foo", "a", "b")]), SessionConfig(notation="inline"))
    >>> session.render()
    'Foo: a, b'
    >>> session.switch_notation("indented")
    'Foo\\n\\ta\\n\\tb'
    >>> [c.args for c in session.commit("Bar: 1")]
    [['Bar', '1']]
"""

# Standard
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

# Third-Party
import orjson
from pydantic import ValidationError

# First-Party
from modtranscoder.codecs import CommandNotationCodec, get_codec
from modtranscoder.codecs.structured import dumps_indented
from modtranscoder.config import SessionConfig
from modtranscoder.errors import DocumentValidationError, EmptyCommandError, NotationParseError, UnsupportedNotationError
from modtranscoder.models import Command, MateDocument, MateForm, MenuDocument, Notation, OmittedEntry, Property, PropertyBatchResult, PropertyView
from modtranscoder.persistence import DocumentStore
from modtranscoder.property_codec import form_to_mate, mate_to_form
from modtranscoder.utils.error_formatter import ErrorFormatter

logger = logging.getLogger(__name__)


def _dump_document(document: Union[MenuDocument, MateDocument]) -> Dict[str, Any]:
    """Convert a canonical document to its external JSON shape.

    Args:
        document: Canonical document.

    Returns:
        Dict[str, Any]: Aliased, JSON-compatible data without absent payloads.
    """
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def _validate_document(model: type, data: Any) -> Any:
    """Validate external data into a canonical document.

    Args:
        model: ``MenuDocument`` or ``MateDocument``.
        data: Decoded JSON.

    Returns:
        The validated document.

    Raises:
        DocumentValidationError: If the data does not match the model.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        formatted = ErrorFormatter.format_validation_error(exc)
        raise DocumentValidationError(formatted["message"], details=formatted["details"]) from exc


def _require_store(store: Optional[DocumentStore]) -> DocumentStore:
    if store is None:
        raise ValueError("No document store configured for this session")
    return store


class CommandTranscoder:
    """Editing session for the command list of a menu document.

    Args:
        document: Canonical menu document; becomes the session's slot.
        config: Session config; seeded from settings when omitted.
        store: Collaborator used by ``save`` (and by ``open``).
    """

    def __init__(self, document: MenuDocument, config: Optional[SessionConfig] = None, store: Optional[DocumentStore] = None):
        self._document = document
        self.config = config or SessionConfig.from_settings()
        self.store = store

    @classmethod
    def open(cls, handle: str, store: DocumentStore, config: Optional[SessionConfig] = None) -> "CommandTranscoder":
        """Load a menu document through a store and start a session on it.

        Args:
            handle: Opaque document handle.
            store: Load/save collaborator; its errors propagate untouched.
            config: Session config.

        Returns:
            CommandTranscoder: New session.

        Raises:
            DocumentValidationError: If the loaded data is not a menu document.
        """
        document = _validate_document(MenuDocument, store.load(handle))
        logger.debug("Opened menu %s with %d commands", handle, len(document.commands))
        return cls(document, config=config, store=store)

    @property
    def document(self) -> MenuDocument:
        """Current canonical document."""
        return self._document

    @property
    def commands(self) -> List[Command]:
        """Current canonical command list."""
        return self._document.commands

    @property
    def notation(self) -> Notation:
        """Active notation."""
        return self.config.notation

    @property
    def codec(self) -> CommandNotationCodec:
        """Codec of the active notation."""
        return get_codec(self.config.notation)

    def render(self) -> str:
        """Serialize the canonical commands in the active notation.

        Returns:
            str: Editable text.
        """
        return self.codec.serialize(self._document.commands)

    def switch_notation(self, new: Union[Notation, str]) -> str:
        """Change the active notation and re-render the canonical model.

        Uncommitted text of the previous notation is not read; commit it first
        to keep those edits.

        Args:
            new: Target notation.

        Returns:
            str: The canonical commands in the new notation.

        Raises:
            UnsupportedNotationError: If ``new`` names no notation.
        """
        codec = get_codec(new)
        if codec.notation is not self.config.notation:
            logger.debug("Switching notation %s -> %s", self.config.notation.value, codec.notation.value)
        self.config.notation = codec.notation
        return codec.serialize(self._document.commands)

    def commit(self, text: str) -> List[Command]:
        """Parse edited text and replace the canonical command list.

        Args:
            text: Editor content in the active notation.

        Returns:
            List[Command]: The new canonical commands.

        Raises:
            NotationParseError: If the text cannot be parsed; the previous
                commands are kept.
        """
        try:
            commands = self.codec.parse(text)
        except NotationParseError:
            logger.warning("Commit in %s notation failed; keeping %d previous commands", self.config.notation.value, len(self._document.commands))
            raise
        self._document = self._document.model_copy(update={"commands": commands})
        return commands

    def save(self, handle: str, edited_text: Optional[str] = None) -> None:
        """Persist the canonical document.

        Args:
            handle: Destination handle.
            edited_text: Pending editor content, committed before saving.

        Raises:
            NotationParseError: If ``edited_text`` does not parse; nothing is saved.
            EmptyCommandError: If a command has no arguments.
            ValueError: If the session has no store.
        """
        store = _require_store(self.store)
        if edited_text is not None:
            self.commit(edited_text)
        for index, command in enumerate(self._document.commands):
            if not command.args:
                raise EmptyCommandError(index)
        store.save(handle, _dump_document(self._document))
        logger.info("Saved menu %s (%d commands)", handle, len(self._document.commands))


class PropertyTranscoder:
    """Editing session for a material document.

    Args:
        document: Canonical material document; becomes the session's slot.
        config: Session config; seeded from settings when omitted.
        store: Collaborator used by ``save`` (and by ``open``).

    Examples:
        >>> from modtranscoder.models import FProperty, Material
        >>> doc = MateDocument(name="m", material=Material(properties=[FProperty(prop_name="_A", number=1.0)]))
        >>> session = PropertyTranscoder(doc, SessionConfig(property_view="form"))
        >>> form = session.render()
        >>> form.properties[0].number
        1.0
        >>> form.properties[0].number = "2.5"
        >>> session.commit(form).has_omissions
        False
        >>> session.properties[0].number
        2.5
    """

    def __init__(self, document: MateDocument, config: Optional[SessionConfig] = None, store: Optional[DocumentStore] = None):
        self._document = document
        self.config = config or SessionConfig.from_settings()
        self.store = store
        self.last_omitted: List[OmittedEntry] = []

    @classmethod
    def open(cls, handle: str, store: DocumentStore, config: Optional[SessionConfig] = None) -> "PropertyTranscoder":
        """Load a material document through a store and start a session on it.

        Args:
            handle: Opaque document handle.
            store: Load/save collaborator; its errors propagate untouched.
            config: Session config.

        Returns:
            PropertyTranscoder: New session.

        Raises:
            DocumentValidationError: If the loaded data is not a material document.
        """
        document = _validate_document(MateDocument, store.load(handle))
        logger.debug("Opened material %s with %d properties", handle, len(document.material.properties))
        return cls(document, config=config, store=store)

    @property
    def document(self) -> MateDocument:
        """Current canonical document."""
        return self._document

    @property
    def properties(self) -> List[Property]:
        """Current canonical property list."""
        return self._document.material.properties

    @property
    def view(self) -> PropertyView:
        """Active view."""
        return self.config.property_view

    def render(self) -> Union[MateForm, str]:
        """Project the canonical document into the active view.

        Returns:
            Union[MateForm, str]: A form for ``FORM``, indented JSON for ``JSON``.
        """
        if self.config.property_view is PropertyView.JSON:
            return dumps_indented(_dump_document(self._document))
        return mate_to_form(self._document)

    def switch_view(self, new: Union[PropertyView, str]) -> Union[MateForm, str]:
        """Change the active view and re-render the canonical document.

        Args:
            new: Target view.

        Returns:
            Union[MateForm, str]: The canonical document in the new view.

        Raises:
            UnsupportedNotationError: If ``new`` names no view.
        """
        try:
            view = PropertyView(new)
        except ValueError as exc:
            raise UnsupportedNotationError(f"unsupported property view: {new!r}") from exc
        self.config.property_view = view
        return self.render()

    def _parse_json(self, text: str) -> MateDocument:
        try:
            data = orjson.loads(text)
        except orjson.JSONDecodeError as exc:
            raise NotationParseError(PropertyView.JSON.value, f"malformed JSON: {exc}", cause=exc) from exc
        if not isinstance(data, dict):
            raise NotationParseError(PropertyView.JSON.value, "root element must be a JSON object")
        return _validate_document(MateDocument, data)

    def commit(self, edited: Union[MateForm, Mapping[str, Any], str]) -> PropertyBatchResult:
        """Replace the canonical document from an edited form or JSON text.

        A form commit never fails on bad numbers; records that cannot be
        rebuilt are dropped and reported. A JSON commit is all-or-nothing.

        Args:
            edited: ``MateForm`` or mapping (form view) or JSON text (JSON view).

        Returns:
            PropertyBatchResult: The new properties and any omitted records.

        Raises:
            NotationParseError: If JSON text is malformed or not an object.
            DocumentValidationError: If JSON text does not describe a material,
                or a form carries a ``properties`` value that is not a list.
        """
        if isinstance(edited, str):
            try:
                document = self._parse_json(edited)
            except (NotationParseError, DocumentValidationError):
                logger.warning("Material JSON commit failed; keeping previous document")
                raise
            batch = PropertyBatchResult(properties=document.material.properties)
        else:
            document, batch = form_to_mate(edited, self._document, allow_signature_edit=self.config.allow_signature_edit)
            if batch.has_omissions:
                logger.warning("Material form commit dropped %d properties", len(batch.omitted))

        self._document = document
        self.last_omitted = list(batch.omitted)
        return batch

    def save(self, handle: str, edited: Optional[Union[MateForm, Mapping[str, Any], str]] = None) -> PropertyBatchResult:
        """Persist the canonical document.

        Args:
            handle: Destination handle.
            edited: Pending form or JSON text, committed before saving.

        Returns:
            PropertyBatchResult: Result of the pending commit, or the current
            properties when nothing was pending.

        Raises:
            ValueError: If the session has no store.
        """
        store = _require_store(self.store)
        batch = self.commit(edited) if edited is not None else PropertyBatchResult(properties=self.properties)
        store.save(handle, _dump_document(self._document))
        logger.info("Saved material %s (%d properties)", handle, len(self.properties))
        return batch


__all__ = ["CommandTranscoder", "PropertyTranscoder", "SessionConfig"]
