# -*- coding: utf-8 -*-
"""Location: ./tests/unit/modtranscoder/test_facade.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for the editing session facades.
"""

# Third-Party
import orjson
import pytest

# First-Party
from modtranscoder.config import SessionConfig
from modtranscoder.errors import DocumentValidationError, EmptyCommandError, NotationParseError, UnsupportedNotationError
from modtranscoder.facade import CommandTranscoder, PropertyTranscoder
from modtranscoder.models import Command, MateForm, MenuDocument, Notation, PropertyView


class TestCommandTranscoder:
    """Command sessions."""

    def test_open_and_render(self, store):
        """Opening loads through the store and renders in the session notation."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig(notation=Notation.INDENTED))
        assert session.document.item_name == "Body"
        assert session.render() == "SetTex\n\tdiffuse\n\tbody01\n\nSetColor"

    def test_default_config_from_settings(self, monkeypatch):
        """Without a config the session uses the configured default notation."""
        monkeypatch.setenv("MODTRANSCODER_DEFAULT_NOTATION", "inline")
        session = CommandTranscoder(MenuDocument(commands=[Command.of("Foo", "a")]))
        assert session.notation is Notation.INLINE
        assert session.render() == "Foo: a"

    def test_switch_notation_without_loss(self, store):
        """Switching through every notation keeps the canonical commands."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig())
        original = list(session.commands)
        assert session.switch_notation("inline") == "SetTex: diffuse, body01\nSetColor: "
        structured = session.switch_notation(Notation.STRUCTURED)
        assert orjson.loads(structured)[0]["Args"] == ["SetTex", "diffuse", "body01"]
        session.switch_notation("indented")
        assert session.commands == original
        assert session.notation is Notation.INDENTED

    def test_switch_unknown_notation(self, store):
        """Unknown notations are rejected and the current one kept."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig(notation="inline"))
        with pytest.raises(UnsupportedNotationError):
            session.switch_notation("yaml")
        assert session.notation is Notation.INLINE

    def test_commit_replaces_commands(self, store):
        """A successful commit replaces the slot and keeps the header."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig(notation="inline"))
        commands = session.commit("Foo: a, b\nBar")
        assert commands == [Command.of("Foo", "a", "b"), Command.of("Bar")]
        assert session.commands == commands
        assert session.document.item_name == "Body"

    def test_failed_commit_keeps_model(self, store):
        """A fatal parse error leaves the previous commands in place."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig(notation="structured"))
        before = session.document
        with pytest.raises(NotationParseError):
            session.commit("{not a list}")
        assert session.document is before

    def test_save_commits_pending_text(self, store):
        """Pending text is parsed before the document is written."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig(notation="inline"))
        session.save("out.menu", edited_text="Foo: a")
        saved = store.documents["out.menu"]
        assert saved["Commands"] == [{"ArgCount": 2, "Args": ["Foo", "a"]}]
        assert saved["ItemName"] == "Body"
        assert saved["Signature"] == "CM3D2_MENU"

    def test_save_rejects_empty_command(self, store):
        """Commands without arguments cannot be saved."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig(notation="structured"))
        with pytest.raises(EmptyCommandError) as exc_info:
            session.save("out.menu", edited_text='[{"Args": ["a"]}, {"Args": []}]')
        assert exc_info.value.index == 1
        assert "out.menu" not in store.documents

    def test_save_with_bad_text_saves_nothing(self, store):
        """A parse failure during save writes nothing."""
        session = CommandTranscoder.open("body.menu", store, SessionConfig(notation="structured"))
        with pytest.raises(NotationParseError):
            session.save("out.menu", edited_text="[")
        assert "out.menu" not in store.documents

    def test_save_requires_store(self):
        """A session without a store cannot save."""
        session = CommandTranscoder(MenuDocument(), SessionConfig())
        with pytest.raises(ValueError):
            session.save("x")

    def test_open_invalid_document(self):
        """Loaded data must be a menu document."""
        from modtranscoder.persistence import InMemoryDocumentStore

        bad = InMemoryDocumentStore({"bad": {"Commands": [{"Args": "not-a-list"}]}})
        with pytest.raises(DocumentValidationError) as exc_info:
            CommandTranscoder.open("bad", bad)
        assert exc_info.value.details[0]["field"] == "Commands.0.Args"

    def test_store_errors_propagate(self, store):
        """Errors from the load service are not wrapped."""
        with pytest.raises(KeyError):
            CommandTranscoder.open("missing", store)


class TestPropertyTranscoder:
    """Material sessions."""

    def test_form_view(self, store):
        """The form view yields a MateForm."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig(property_view="form"))
        form = session.render()
        assert isinstance(form, MateForm)
        assert form.shader_name == "CM3D2/Toony_Lighted"
        assert [r.type_name for r in form.properties] == ["tex", "col", "f", "keyword"]

    def test_json_view(self, store, mate_data):
        """The JSON view yields the whole document as indented JSON."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig(property_view="json"))
        text = session.render()
        assert text.startswith("{\n  ")
        data = orjson.loads(text)
        assert data["Material"]["Properties"][3]["Count"] == 1
        assert data["Material"]["Properties"][0]["Tex2D"]["Name"] == "body"
        assert "TexRT" not in data["Material"]["Properties"][0]

    def test_switch_view(self, store):
        """Switching views re-renders the same document."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        text = session.switch_view(PropertyView.JSON)
        assert session.view is PropertyView.JSON
        assert isinstance(text, str)
        assert isinstance(session.switch_view("form"), MateForm)

    def test_switch_unknown_view(self, store):
        """Unknown views are rejected."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        with pytest.raises(UnsupportedNotationError):
            session.switch_view("table")

    def test_form_commit_coerces_and_reports(self, store):
        """Form commits coerce numbers and report dropped records."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        form = session.render()
        form.properties[2].number = "1."
        form.properties[0].sub_tag = "bogus"
        result = session.commit(form)
        assert [p.prop_name for p in session.properties] == ["_Color", "_Shininess", "keywords"]
        assert session.properties[1].number == 1.0
        assert result.has_omissions
        assert session.last_omitted[0].index == 0

    @pytest.mark.parametrize(
        "bad",
        [
            {"TypeName": "keyword", "propName": "_K", "keywords": "abc"},
            {"TypeName": 7, "propName": "_X"},
            "junk",
        ],
        ids=["keywords_not_list", "type_name_not_text", "not_a_mapping"],
    )
    def test_form_commit_malformed_record(self, store, bad):
        """A malformed record in a mapping form is reported; the commit still lands."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        form = session.render().model_dump(by_alias=True)
        good = {"TypeName": "f", "propName": "_A", "number": "1"}
        form["properties"] = [good, bad, good]

        result = session.commit(form)
        assert [p.prop_name for p in session.properties] == ["_A", "_A"]
        assert [o.index for o in result.omitted] == [1]
        assert session.last_omitted[0].reason.startswith("Validation failed")

    def test_form_commit_keyword_key_not_text(self, store):
        """Keyword keys are rendered as text on commit."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        session.commit({"properties": [{"TypeName": "keyword", "propName": "kw", "keywords": [{"key": 5, "value": True}]}]})
        assert session.properties[0].keywords[0].key == "5"
        assert session.last_omitted == []

    def test_form_commit_header_gated(self, store):
        """Signature edits need allow_signature_edit."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        form = session.render()
        form.signature = "OTHER"
        session.commit(form)
        assert session.document.signature == "CM3D2_MATERIAL"

        session = PropertyTranscoder.open("skin.mate", store, SessionConfig(allow_signature_edit=True))
        form = session.render()
        form.signature = "OTHER"
        session.commit(form)
        assert session.document.signature == "OTHER"

    def test_json_commit(self, store, mate_data):
        """A JSON commit replaces the whole document."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig(property_view="json"))
        mate_data["Name"] = "renamed"
        mate_data["Material"]["Properties"].append({"TypeName": "matrix", "PropName": "_M"})
        result = session.commit(orjson.dumps(mate_data).decode())
        assert session.document.name == "renamed"
        assert session.properties[-1].type_name == "matrix"
        assert not result.has_omissions

    @pytest.mark.parametrize("text,error", [("{oops", NotationParseError), ("[1, 2]", NotationParseError), ('{"Version": "x"}', DocumentValidationError)])
    def test_json_commit_failure_keeps_model(self, store, text, error):
        """Malformed JSON keeps the previous document."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig(property_view="json"))
        before = session.document
        with pytest.raises(error):
            session.commit(text)
        assert session.document is before

    def test_save(self, store):
        """Saving writes the canonical document through the store."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        form = session.render()
        form.properties[1].color_r = "0.5"
        session.save("out.mate", form)
        saved = store.documents["out.mate"]
        assert saved["Material"]["Properties"][1]["Color"] == [0.5, 1.0, 1.0, 1.0]
        assert saved["Material"]["Properties"][3]["Count"] == 1

    def test_save_without_pending_edit(self, store, mate_data):
        """Saving an untouched session reproduces the loaded document."""
        session = PropertyTranscoder.open("skin.mate", store, SessionConfig())
        session.save("copy.mate")
        reopened = PropertyTranscoder.open("copy.mate", store, SessionConfig())
        assert reopened.document == session.document
