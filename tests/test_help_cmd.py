"""
Tests for /help — commands, settings and key binding sections
"""

from hubline.content.help_text import COMMAND_DOCS, KEY_DOCS, SETTING_DOCS, setting_doc


class TestCommandList:

    def test_lists_every_command(self, hubline_factory):
        lines = hubline_factory.run("/help")
        assert lines[:2] == ["", "Available commands:"]
        assert f" /accept - {COMMAND_DOCS['accept'].summary}" in lines
        listed = [line for line in lines if line.startswith(" /")]
        assert len(listed) == len(hubline_factory.registry)
        assert lines[-3:] == ["", "For help on key bindings, use `/help keys'.", ""]


class TestCommandHelp:

    def test_with_description(self, hubline_factory):
        doc = COMMAND_DOCS["open"]
        lines = hubline_factory.run("/help open")
        assert lines == [
            "",
            f"Usage: /open {doc.args}",
            f"  {doc.summary}",
            "",
            doc.description,
            "",
        ]

    def test_leading_slash(self, hubline_factory):
        assert hubline_factory.run("/help /open") == hubline_factory.run("/help open")

    def test_without_arguments_or_description(self, hubline_factory):
        assert hubline_factory.run("/help quit") == ["", "Usage: /quit", "  Quit hubline.", ""]

    def test_unknown(self, hubline_factory):
        assert hubline_factory.run("/help nosuch") == ["Unknown command 'nosuch'."]

    def test_unknown_section(self, hubline_factory):
        assert hubline_factory.run("/help foo bar") == ["Unknown help section `foo'."]


class TestSettingHelp:

    def test_global_setting(self, hubline_factory):
        doc = SETTING_DOCS["slots"]
        assert hubline_factory.run("/help set slots") == [
            "", "Setting: global.slots <integer>", "", doc.description, "",
        ]

    def test_hub_setting(self, hubline_factory):
        lines = hubline_factory.run("/help hset nick")
        assert lines[1] == "Setting: #hub.nick <string>"

    def test_colors_share_entry(self, hubline_factory):
        lines = hubline_factory.run("/help set color_title")
        assert lines[1] == "Setting: global.color_* <color>"

    def test_unknown(self, hubline_factory):
        assert hubline_factory.run("/help set nosuch") == ["Unknown setting 'nosuch'."]

    def test_every_user_setting_documented(self, hubline_factory):
        for definition in hubline_factory.store.definitions:
            if not definition.internal:
                assert setting_doc(definition.name) is not None, definition.name

    def test_scope_matches_definitions(self, hubline_factory):
        for definition in hubline_factory.store.definitions:
            if not definition.internal and not definition.name.startswith("color_"):
                assert setting_doc(definition.name).hub == definition.hub_ok, definition.name


class TestKeyHelp:

    def test_sections(self, hubline_factory):
        lines = hubline_factory.run("/help keys")
        assert lines[:2] == ["", "Available sections:"]
        assert " global - Global key bindings" in lines
        assert lines[-2].startswith("Use `/help keys <name>'")

    def test_sections_in_order(self, hubline_factory):
        assert list(KEY_DOCS) == ["global", "browse", "connections", "queue", "search", "userlist"]

    def test_one_section(self, hubline_factory):
        lines = hubline_factory.run("/help keys queue")
        assert lines[:3] == ["", "Key bindings for: queue - Download queue.", ""]
        assert lines[3] == KEY_DOCS["queue"].bindings

    def test_unknown_section(self, hubline_factory):
        assert hubline_factory.run("/help keys nope") == ["Unknown keys section 'nope'."]


class TestSuggest:

    def test_topics(self, hubline_factory):
        assert hubline_factory.suggest("/help se") == ["/help search", "/help set"]

    def test_keys_topic_included(self, hubline_factory):
        assert hubline_factory.suggest("/help k") == ["/help keys", "/help kick"]

    def test_setting_names(self, hubline_factory):
        assert hubline_factory.suggest("/help set sl") == ["/help set slots"]
        assert hubline_factory.suggest("/help hset sl") == ["/help hset slots"]

    def test_key_sections(self, hubline_factory):
        assert hubline_factory.suggest("/help keys q") == ["/help keys queue"]

    def test_other_second_word(self, hubline_factory):
        assert hubline_factory.suggest("/help open x") == []
