# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Asset document transcoder – public API.

Typical usage::

    from modtranscoder import CommandTranscoder, JsonFileDocumentStore, SessionConfig

    session = CommandTranscoder.open("body.menu.json", JsonFileDocumentStore(), SessionConfig(notation="inline"))
    text = session.render()
    session.save("body.menu.json", edited_text=text)
"""

__version__ = "0.1.0"

from modtranscoder.codecs import get_codec
from modtranscoder.coercion import coerce
from modtranscoder.config import get_settings, SessionConfig, Settings
from modtranscoder.errors import DocumentValidationError, EmptyCommandError, NotationParseError, TranscoderError, UnsupportedNotationError
from modtranscoder.facade import CommandTranscoder, PropertyTranscoder
from modtranscoder.models import Command, EditableRecord, MateDocument, MateForm, MenuDocument, Notation, PropertyBatchResult, PropertyType, PropertyView
from modtranscoder.persistence import DocumentStore, InMemoryDocumentStore, JsonFileDocumentStore
from modtranscoder.property_codec import form_to_mate, from_editable, from_editable_list, mate_to_form, to_editable, to_editable_list

__all__ = [
    "__version__",
    # Sessions
    "CommandTranscoder",
    "PropertyTranscoder",
    "SessionConfig",
    # Config
    "Settings",
    "get_settings",
    # Codecs
    "coerce",
    "get_codec",
    "to_editable",
    "to_editable_list",
    "from_editable",
    "from_editable_list",
    "mate_to_form",
    "form_to_mate",
    # Models
    "Command",
    "EditableRecord",
    "MateDocument",
    "MateForm",
    "MenuDocument",
    "Notation",
    "PropertyBatchResult",
    "PropertyType",
    "PropertyView",
    # Persistence
    "DocumentStore",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    # Errors
    "TranscoderError",
    "NotationParseError",
    "UnsupportedNotationError",
    "DocumentValidationError",
    "EmptyCommandError",
]
